# blob_life/ui/renderer.py
from __future__ import annotations
import math, pygame

from ..sim.config import WorldConfig

# ---------- Colors / Theme ----------
BG_COLOR      = (14,16,20)
GRID_COLOR    = (35,40,48)
BOUND_COLOR   = (90,60,60)
FOLLOW_COLOR  = (240,240,240)
PANEL_BG      = (10,12,16)

TOPBAR_BG     = (24,26,32)
TOPBAR_LINE   = (54,58,66)

# ---------- Layout knobs ----------
TOPBAR_HEIGHT    = 100
HUD_PAD_X        = 12
HUD_PAD_Y        = 10
PANEL_PADDING    = 12
TITLE_GAP        = 6
SECTION_GAP      = 10
GRID_SPACING     = 50.0


class Renderer:
    """
    Draws the world around the followed creature. Only creatures returned by
    World.visible() for the current viewport are drawn.
    """
    def __init__(self, screen, world_rect: pygame.Rect, panel_rect: pygame.Rect,
                 world_cfg: WorldConfig, font_name="Menlo"):
        self.screen = screen
        self.cfg = world_cfg
        self.topbar_height = TOPBAR_HEIGHT
        self.zoom = 1.0
        self.resize(world_rect, panel_rect)

        self.font = pygame.font.SysFont(font_name, 14)
        self.bigfont = pygame.font.SysFont(font_name, 18, bold=True)

        self.show_panel = True   # toggled by 'P'
        self._cam = (0.0, 0.0)

    def resize(self, world_rect: pygame.Rect, panel_rect: pygame.Rect):
        """Update layout rects after a window resize."""
        self.panel_rect_outer = panel_rect
        self.panel_content = self.panel_rect_outer.inflate(-2*PANEL_PADDING, -2*PANEL_PADDING)
        self.world_rect = pygame.Rect(
            world_rect.x,
            world_rect.y + self.topbar_height,
            world_rect.w,
            max(0, world_rect.h - self.topbar_height)
        )

    # ---------- camera ----------
    def _update_camera(self, live):
        f = live.followed()
        if f is not None:
            self._cam = (f.x, f.y)

    def view_half_extent(self):
        return (self.world_rect.w / 2.0 / self.zoom, self.world_rect.h / 2.0 / self.zoom)

    def world_to_screen(self, x, y):
        cx, cy = self._cam
        sx = self.world_rect.centerx + (x - cx) * self.zoom
        sy = self.world_rect.centery + (y - cy) * self.zoom
        return int(sx), int(sy)

    # ---------- top bar ----------
    def _draw_topbar(self):
        scr = self.screen.get_rect()
        bar = pygame.Rect(0, 0, scr.w, self.topbar_height)
        pygame.draw.rect(self.screen, TOPBAR_BG, bar)
        pygame.draw.line(self.screen, TOPBAR_LINE, (0, self.topbar_height), (scr.w, self.topbar_height), 1)

    # ---------- grid ----------
    def _draw_grid(self):
        rx, ry, rw, rh = self.world_rect
        hw, hh = self.view_half_extent()
        cx, cy = self._cam
        k0 = int(math.floor((cx - hw) / GRID_SPACING))
        k1 = int(math.ceil((cx + hw) / GRID_SPACING))
        for k in range(k0, k1 + 1):
            sx, _ = self.world_to_screen(k * GRID_SPACING, 0)
            pygame.draw.line(self.screen, GRID_COLOR, (sx, ry), (sx, ry+rh), 1)
        k0 = int(math.floor((cy - hh) / GRID_SPACING))
        k1 = int(math.ceil((cy + hh) / GRID_SPACING))
        for k in range(k0, k1 + 1):
            _, sy = self.world_to_screen(0, k * GRID_SPACING)
            pygame.draw.line(self.screen, GRID_COLOR, (rx, sy), (rx+rw, sy), 1)

        # world bounds
        x0, y0 = self.world_to_screen(-self.cfg.width, -self.cfg.height)
        x1, y1 = self.world_to_screen(self.cfg.width, self.cfg.height)
        pygame.draw.rect(self.screen, BOUND_COLOR, pygame.Rect(x0, y0, x1 - x0, y1 - y0), 1)

    # ---------- creatures ----------
    def _draw_creature(self, c, followed):
        sx, sy = self.world_to_screen(c.x, c.y)
        r = max(1, int(c.radius * self.zoom))
        pygame.draw.circle(self.screen, c.color, (sx, sy), r)
        if c is followed:
            pygame.draw.circle(self.screen, FOLLOW_COLOR, (sx, sy), r + 3, 1)

    def draw_world(self, live):
        self._draw_topbar()
        self._update_camera(live)

        prev_clip = self.screen.get_clip()
        self.screen.set_clip(self.world_rect)
        self._draw_grid()
        hw, hh = self.view_half_extent()
        followed = live.followed()
        drawn = 0
        for c in live.world.visible(self._cam[0], self._cam[1], hw, hh):
            self._draw_creature(c, followed)
            drawn += 1
        self.screen.set_clip(prev_clip)
        pygame.draw.rect(self.screen, (70,75,85), self.world_rect, 2)
        return drawn

    # ---------- trait panel ----------
    def draw_panel(self, live):
        if not self.show_panel:
            return
        pr = self.panel_rect_outer
        pc = self.panel_content
        pygame.draw.rect(self.screen, PANEL_BG, pr)
        pygame.draw.rect(self.screen, (70,75,85), pr, 2)

        title = self.bigfont.render("Traits (power vs radius)", True, (220,220,230))
        self.screen.blit(title, (pc.x, pc.y))
        y0 = pc.y + title.get_height() + SECTION_GAP
        box = pygame.Rect(pc.x, y0, pc.w, max(120, int(pc.h * 0.6)))
        pygame.draw.rect(self.screen, (25,30,36), box)

        pop = live.world.creatures
        if not pop:
            self.screen.blit(self.font.render("Extinct", True, (220,80,80)), (box.x + 10, box.y + 10))
            return

        pmin = min(c.power for c in pop)
        pmax = max(c.power for c in pop)
        span = (pmax - pmin) or 1.0
        rmin, rmax = 0.0, self.cfg.max_radius
        for c in pop:
            tx = (c.power - pmin) / span
            ty = (c.radius - rmin) / (rmax - rmin)
            sx = box.x + 6 + tx * (box.w - 12)
            sy = box.bottom - 6 - ty * (box.h - 12)
            pygame.draw.circle(self.screen, c.color, (int(sx), int(sy)), 3)

        means = live.stat_means()
        y = box.bottom + SECTION_GAP
        for s in (
            f"power  [{pmin:+.2f}, {pmax:+.2f}]  mean {means['mean_power']:+.2f}",
            f"radius mean {means['mean_radius']:.2f}   speed mean {means['mean_speed']:.2f}",
            f"energy mean {means['mean_energy']:.2f}",
        ):
            self.screen.blit(self.font.render(s, True, (190,195,205)), (pc.x, y))
            y += 18

    def draw_hud(self, live, sim_speed, paused, rec_enabled, csv_enabled):
        f = live.followed()
        follow_txt = f"#{f.id} gen {f.generation} E={f.energy:.2f} at ({f.x:.0f},{f.y:.0f})" if f else "nobody"
        lines = [
            f"Tick: {live.tick}   Population: {len(live.world)}   Births: {live.total_births}   Eaten: {live.total_kills}   Starved: {live.total_starved}",
            f"Following: {follow_txt}   Zoom: {self.zoom:.2f}",
            f"Sim speed: {sim_speed} ticks/frame  {'PAUSED' if paused else ''}  {'REC ON' if rec_enabled else 'REC OFF'}  {'CSV ON' if csv_enabled else 'CSV OFF'}",
            "Controls:",
            " Space Pause   R Reset   [ ] SimSpeed   F follow next   Z/X zoom   P panel",
            " V toggle record   C clear record   S save NPZ   L toggle CSV   Esc quit",
        ]
        x = HUD_PAD_X
        y = HUD_PAD_Y
        for i, s in enumerate(lines):
            col = (225,225,235) if i < 3 else (170,175,185)
            self.screen.blit(self.font.render(s, True, col), (x, y))
            y += 16
