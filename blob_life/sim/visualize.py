# blob_life/sim/visualize.py
from __future__ import annotations
import matplotlib.pyplot as plt
from matplotlib.collections import PatchCollection
from matplotlib.patches import Circle

from .world import World

def snapshot(world: World, title: str = "", show: bool = True, out_path: str | None = None):
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_xlim(-world.width, world.width)
    ax.set_ylim(-world.height, world.height)
    ax.set_aspect("equal")
    live = world.live_creatures()
    circles = [Circle((c.x, c.y), c.radius) for c in live]
    colors = [tuple(v / 255.0 for v in c.color) for c in live]
    ax.add_collection(PatchCollection(circles, facecolors=colors, edgecolors="none", alpha=0.85))
    followed = world.followed()
    if followed is not None:
        ax.add_patch(Circle((followed.x, followed.y), followed.radius * 1.6,
                            fill=False, edgecolor="black", linewidth=1.0))
    ax.set_title(title or f"Snapshot (N={len(live)})")
    plt.tight_layout()
    if out_path:
        fig.savefig(out_path, dpi=120)
    if show:
        plt.show()
    return fig
