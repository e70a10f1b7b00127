"""
visualizer.py - pedigree rendering (matplotlib)
Draws the connectors computed by layout.compute_links and the node symbols,
returns a base64 PNG
"""

import io
import base64
import numpy as np
from typing import Optional, List, Union, Iterable
from dataclasses import dataclass, field

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle, Circle, Polygon

from .models import Individual, Pedigree, Gender, Status, Severity
from .layout import LayoutConfig, compute_links
from .validator import ValidationIssue


# ============================================================
# Settings
# ============================================================
@dataclass
class GridConfig:
    # canvas (inches)
    fig_width: float = 10.0
    fig_height: float = 7.0
    margin: float = 60.0

    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # style
    line_width: float = 1.5
    pattern_line_width: float = 0.8
    pattern_step: float = 7.0
    edge_color: str = 'black'
    error_color: str = '#D62828'
    warning_color: str = '#F77F00'

    # fills
    color_normal: str = 'white'
    color_affected: str = '#6B21A8'

    font_size_label: int = 9
    dpi: int = 150


# ============================================================
# Renderer
# ============================================================
class PedigreeVisualizer:
    def __init__(self, config: Optional[GridConfig] = None):
        self.config = config or GridConfig()

    def draw(
        self,
        individuals: Union[Pedigree, List[Individual]],
        issues: Optional[Iterable[ValidationIssue]] = None,
        title: str = "",
        save_path: Optional[str] = None
    ) -> str:
        cfg = self.config
        pedigree = individuals if isinstance(individuals, Pedigree) else Pedigree(individuals)
        fig, ax = plt.subplots(figsize=(cfg.fig_width, cfg.fig_height))

        # 1. connectors
        self._draw_connections(ax, pedigree)

        # 2. nodes
        flagged = self._issue_colors(issues or [])
        self._draw_nodes(ax, pedigree, flagged)

        # 3. labels
        self._draw_labels(ax, pedigree)

        ax.set_aspect('equal')
        ax.axis('off')
        if title:
            ax.set_title(title)

        if len(pedigree):
            xs = [p.x for p in pedigree]
            ys = [p.y for p in pedigree]
            m = cfg.margin
            ax.set_xlim(min(xs) - m, max(xs) + m)
            # canvas y grows downward
            ax.set_ylim(max(ys) + m, min(ys) - m)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=cfg.dpi, bbox_inches='tight', facecolor='white')

        buf = io.BytesIO()
        plt.savefig(buf, format='png', dpi=cfg.dpi, bbox_inches='tight', facecolor='white')
        buf.seek(0)
        img_base64 = base64.b64encode(buf.read()).decode('utf-8')
        plt.close(fig)
        return img_base64

    # --------------------------------------------------------
    # [1] Connectors
    # --------------------------------------------------------
    def _draw_connections(self, ax, pedigree: Pedigree):
        cfg = self.config
        for link in compute_links(pedigree, cfg.layout):
            ax.plot([link.x1, link.x2], [link.y1, link.y2],
                    color=cfg.edge_color, lw=cfg.line_width, zorder=1)

    # --------------------------------------------------------
    # [2] Nodes
    # --------------------------------------------------------
    def _issue_colors(self, issues: Iterable[ValidationIssue]) -> dict:
        """id -> outline color; errors win over warnings"""
        cfg = self.config
        colors = {}
        for issue in issues:
            if issue.severity == Severity.ERROR:
                colors[issue.target_id] = cfg.error_color
            else:
                colors.setdefault(issue.target_id, cfg.warning_color)
        return colors

    def _draw_nodes(self, ax, pedigree: Pedigree, flagged: dict):
        cfg = self.config
        half = cfg.layout.node_width / 2

        for p in pedigree:
            edge = flagged.get(p.id, cfg.edge_color)

            if p.status == Status.AFFECTED:
                shape = self._draw_shape_base(ax, p.x, p.y, half, p.gender, cfg.color_affected, edge)
            else:
                shape = self._draw_shape_base(ax, p.x, p.y, half, p.gender, cfg.color_normal, edge)

            if p.status == Status.CARRIER:
                self._draw_hatch(ax, p.x, p.y, half, shape)
            elif p.status == Status.UNKNOWN:
                ax.text(p.x, p.y, "?", ha='center', va='center',
                        fontsize=cfg.font_size_label + 3, zorder=12)

            if p.is_deceased:
                ax.plot([p.x - half * 1.3, p.x + half * 1.3], [p.y + half * 1.3, p.y - half * 1.3],
                        color=cfg.edge_color, lw=cfg.line_width, zorder=13)

            if p.is_proband:
                ax.annotate("", xy=(p.x - half, p.y + half * 0.6),
                            xytext=(p.x - half * 2.2, p.y + half * 1.8),
                            arrowprops=dict(arrowstyle='->', lw=cfg.line_width),
                            zorder=13)

    def _draw_shape_base(self, ax, x, y, half, gender, color, edge):
        """Square (male), circle (female), diamond (unknown)"""
        cfg = self.config
        if gender == Gender.MALE:
            patch = Rectangle((x - half, y - half), half * 2, half * 2,
                              facecolor=color, edgecolor=edge, lw=cfg.line_width, zorder=10)
        elif gender == Gender.FEMALE:
            patch = Circle((x, y), half,
                           facecolor=color, edgecolor=edge, lw=cfg.line_width, zorder=10)
        else:
            patch = Polygon([(x, y - half), (x + half, y), (x, y + half), (x - half, y)],
                            closed=True, facecolor=color, edgecolor=edge,
                            lw=cfg.line_width, zorder=10)
        ax.add_patch(patch)
        return patch

    def _draw_hatch(self, ax, x, y, half, clip_shape):
        """Diagonal hatch clipped to the node shape (carrier)"""
        cfg = self.config
        for i in np.arange(-half * 3, half * 3, cfg.pattern_step):
            line, = ax.plot([x - half * 2, x + half * 2], [y + i - half * 2, y + i + half * 2],
                            color=cfg.edge_color, lw=cfg.pattern_line_width, zorder=11)
            line.set_clip_path(clip_shape)

    # --------------------------------------------------------
    # [3] Labels
    # --------------------------------------------------------
    def _draw_labels(self, ax, pedigree: Pedigree):
        cfg = self.config
        for p in pedigree:
            if p.name:
                ax.text(p.x, p.y + cfg.layout.node_height / 2 + 8, p.name,
                        ha='center', va='top', fontsize=cfg.font_size_label)

    # --------------------------------------------------------
    # Utilities
    # --------------------------------------------------------
    def save_to_file(self, individuals, filepath: str, issues=None, title: str = ""):
        """Write a PNG file"""
        self.draw(individuals, issues=issues, title=title, save_path=filepath)

    def get_base64_image(self, individuals, issues=None, title: str = "") -> str:
        """Base64 PNG"""
        return self.draw(individuals, issues=issues, title=title)
