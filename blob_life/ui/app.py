# blob_life/ui/app.py
from __future__ import annotations
import pygame, random
from .renderer import Renderer, BG_COLOR
from .recorder import Recorder
from .csv_writer import TickCsvLogger
from ..sim.live import LiveSim
from ..sim.config import DEFAULT, SIM, SimulationConfig

def run_ui(config: SimulationConfig = DEFAULT, seed: int = SIM.seed, n: int = SIM.initial_population):
    pygame.init()
    pygame.display.set_caption("Blob Life: Live")
    W, H = 1280, 720
    screen = pygame.display.set_mode((W, H), pygame.RESIZABLE | pygame.SCALED)
    clock = pygame.time.Clock()

    def layout():
        w, h = screen.get_size()
        panel_w = int(w * 0.28)
        world_rect = pygame.Rect(10, 10, w - panel_w - 30, h - 20)
        panel_rect = pygame.Rect(w - panel_w - 10, 120, panel_w, h - 140)
        return world_rect, panel_rect

    world_rect, panel_rect = layout()

    live = LiveSim(config, seed=seed)
    live.seed_world(n=n)
    logger = TickCsvLogger(path="runs/ui_ticks.csv", every=10)
    renderer = Renderer(screen, world_rect, panel_rect, config.world)
    recorder = Recorder(enabled=False, stride_ticks=2,
                        world_width=config.world.width, world_height=config.world.height)

    paused = False
    sim_speed = 1  # ticks/frame
    running = True

    while running:
        clock.tick(20)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(e.size, pygame.RESIZABLE | pygame.SCALED)
                world_rect, panel_rect = layout()
                renderer.screen = screen
                renderer.resize(world_rect, panel_rect)
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE: running = False
                elif e.key == pygame.K_SPACE: paused = not paused
                elif e.key == pygame.K_r:
                    live.reset(seed=random.randint(0, 1_000_000), n=n)
                    logger = TickCsvLogger(path=logger.path, every=logger.every, enabled=logger.enabled)
                    paused = False
                elif e.key == pygame.K_LEFTBRACKET:
                    sim_speed = max(1, sim_speed - 1)
                elif e.key == pygame.K_RIGHTBRACKET:
                    sim_speed = min(40, sim_speed + 1)
                elif e.key == pygame.K_f: live.follow_next()
                elif e.key == pygame.K_z: renderer.zoom = min(8.0, renderer.zoom * 1.25)
                elif e.key == pygame.K_x: renderer.zoom = max(0.1, renderer.zoom / 1.25)
                elif e.key == pygame.K_p: renderer.show_panel = not renderer.show_panel
                elif e.key == pygame.K_v: recorder.toggle()
                elif e.key == pygame.K_c: recorder.clear()
                elif e.key == pygame.K_s: recorder.save_npz()
                elif e.key == pygame.K_l: logger.enabled = not logger.enabled

        if not paused and not live.extinct:
            for _ in range(sim_speed):
                stats = live.step()
                logger.maybe_append(stats, live.world)
                recorder.maybe_capture(live)

        # viewport culling needs x order; moves and newborns break it until the next tick
        live.world.sort()
        screen.fill(BG_COLOR)
        renderer.draw_world(live)
        renderer.draw_hud(live, sim_speed, paused, recorder.enabled, logger.enabled)
        renderer.draw_panel(live)
        pygame.display.flip()

    pygame.quit()
