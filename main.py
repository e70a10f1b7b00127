"""
GenoFlow Engine - pedigree validator
Console entry point

Usage:
    python main.py                           # validate the bundled sample (AR)
    python main.py pedigree.json --mode XL   # validate a saved pedigree
    python main.py pedigree.json --analysis  # add derived statistics
    python main.py pedigree.json --save      # write JSON result + PNG
"""

import argparse
import base64
import json
import logging
import os
import sys
from datetime import datetime
from typing import Optional, List

from genoflow_engine import (
    Individual, InheritanceMode,
    LogicValidator, PedigreeAnalyzer,
    PedigreeVisualizer, GridConfig,
    compute_links, load_config, load_snapshot, sample_pedigree
)
from genoflow_engine.snapshot import SnapshotError, individual_to_record


class GenoFlowEngine:
    """
    Main GenoFlow class
    Validation, analysis and rendering of one pedigree snapshot
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: optional JSON config file
        """
        self.config = load_config(config_path)
        self.validator = LogicValidator()
        self.analyzer = PedigreeAnalyzer()
        self.visualizer = PedigreeVisualizer(GridConfig(layout=self.config.layout))

    def check_pedigree(
        self,
        individuals: List[Individual],
        mode: Optional[InheritanceMode] = None,
        with_analysis: bool = False,
        with_image: bool = False
    ) -> dict:
        """
        Validate (and optionally analyze / render) a pedigree

        Args:
            individuals: snapshot to check
            mode: inheritance mode (config default when None)
            with_analysis: include derived statistics
            with_image: include a base64 PNG

        Returns:
            result dictionary
        """
        mode = mode or self.config.default_mode

        print(f"\n{'='*50}")
        print("GenoFlow - checking pedigree...")
        print(f"{'='*50}")
        print(f"Inheritance mode: {mode.label} ({mode.value})")
        print(f"Individuals: {len(individuals)}")
        print()

        report = self.validator.validate_logic(individuals, mode)
        print(f"- validation done: {'valid' if report.is_valid else 'INVALID'}")

        links = compute_links(individuals, self.config.layout)
        print(f"- layout done: {len(links)} connectors")

        result = {
            'success': True,
            'timestamp': datetime.now().isoformat(),
            'mode': mode.value,
            'individuals': [individual_to_record(p) for p in individuals],
            'validation': report.to_dict(),
            'links': [link.to_dict() for link in links]
        }

        if with_analysis:
            result['analysis'] = self.analyzer.analyze(individuals, mode).to_dict()
            print("- analysis done")

        if with_image:
            result['image'] = self.visualizer.draw(individuals, issues=report.issues)
            print("- image rendered")

        return result

    def display_result(self, result: dict):
        """Print a result to the console"""
        validation = result['validation']

        print("\n" + "="*60)
        print(f"Validation ({result['mode']}): "
              f"{validation['error_count']} error(s), {validation['warning_count']} warning(s)")
        print("="*60)

        if not validation['issues']:
            print("  No issues found.")
        for issue in validation['issues']:
            print(f"  [{issue['type'].upper()}] {issue['message']} ({issue['id']})")

        analysis = result.get('analysis')
        if analysis:
            print("\n[Analysis]")
            print(f"  Total members mapped: {analysis['total_members']}")
            print(f"  Affected found:       {analysis['affected_count']}")
            print(f"  Obligate carriers:    {analysis['obligate_carriers']}")
            print(f"  Risk: {analysis['risk_summary']}")
            print("\n[Phenotype inventory]")
            for row in analysis['inventory']:
                print(f"  {row['label']}: {row['status']}")

    def save_result(self, result: dict, output_dir: str = "output"):
        """Write the result (JSON + PNG) to output_dir"""
        os.makedirs(output_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"pedigree_{timestamp}"

        json_data = {k: v for k, v in result.items() if k != 'image'}
        json_path = os.path.join(output_dir, f"{base_name}.json")
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, ensure_ascii=False, indent=2)
        print(f"- JSON saved: {json_path}")

        if result.get('image'):
            img_path = os.path.join(output_dir, f"{base_name}.png")
            with open(img_path, 'wb') as f:
                f.write(base64.b64decode(result['image']))
            print(f"- image saved: {img_path}")


def parse_args(argv=None):
    """Command line arguments"""
    parser = argparse.ArgumentParser(
        description="GenoFlow Engine - pedigree validator"
    )

    parser.add_argument(
        'snapshot',
        nargs='?',
        default=None,
        help="pedigree.json snapshot (default: bundled sample)"
    )

    parser.add_argument(
        '--mode', '-m',
        type=str,
        default=None,
        choices=[m.value for m in InheritanceMode],
        help="inheritance mode (default: from config, AR)"
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help="JSON config file"
    )

    parser.add_argument(
        '--analysis', '-a',
        action='store_true',
        help="include derived statistics"
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default='output',
        help="output directory (default: output)"
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help="save the result and a PNG image"
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="debug logging"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main function; exit status 1 when the pedigree has errors"""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    try:
        individuals = load_snapshot(args.snapshot) if args.snapshot else sample_pedigree()
    except (OSError, SnapshotError) as e:
        print(f"Error: could not load pedigree: {e}", file=sys.stderr)
        return 2

    engine = GenoFlowEngine(config_path=args.config)
    mode = InheritanceMode.parse(args.mode) if args.mode else None

    result = engine.check_pedigree(
        individuals,
        mode=mode,
        with_analysis=args.analysis,
        with_image=args.save
    )

    engine.display_result(result)

    if args.save:
        engine.save_result(result, args.output)

    return 0 if result['validation']['is_valid'] else 1


if __name__ == "__main__":
    sys.exit(main())
