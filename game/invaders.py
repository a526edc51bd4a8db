# game/invaders.py
import logging
import queue

import pygame

from config import GameConfig, GRID_PX, WIN_W, WIN_H, RENDER_FPS, SHOW_CAMERA, WORKER_JOIN_TIMEOUT
from game.session import GameLoopScheduler, INVASION_BANNER, Phase, RenderSnapshot
from gesture.types import SensorStatus
from gesture.worker import SensorWorker

logger = logging.getLogger(__name__)

ASSET_COLORS = {
    "background": (18, 18, 28),
    "enemy": (120, 220, 90),
    "breach": (235, 70, 70),
}
GRID_LINE = (60, 60, 75)
CURSOR = (90, 200, 255)
CURSOR_RADIUS = 25


def draw_grid(screen, snapshot: RenderSnapshot):
    rows = len(snapshot.cells)
    cols = len(snapshot.cells[0])
    cw, ch = GRID_PX / cols, GRID_PX / rows
    for r, row in enumerate(snapshot.cells):
        for c, key in enumerate(row):
            rect = pygame.Rect(int(c * cw), int(r * ch), int(cw) + 1, int(ch) + 1)
            pygame.draw.rect(screen, ASSET_COLORS[key], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)

def draw_lines(screen, font, text, x, y, color, spacing=4):
    for line in text.split("\n"):
        if line:
            screen.blit(font.render(line, True, color), (x, y))
        y += font.get_linesize() + spacing
    return y


def run_game(config: GameConfig, camera_index=None, show_camera: bool = SHOW_CAMERA):
    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Gesture Invaders - MediaPipe Holistic")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 20)
    big = pygame.font.SysFont("Consolas", 28, bold=True)

    scheduler = GameLoopScheduler(config)

    status = SensorStatus()
    worker = SensorWorker(status, camera_index=camera_index, show_camera=show_camera,
                          use_left_hand=config.use_left_hand)
    worker.start()
    logger.info(f"SensorWorker started: {worker.is_alive()}")

    snapshot = scheduler.snapshot
    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return
                    # keyboard fallback for the "New Game" button
                    if event.key == pygame.K_r:
                        scheduler.reset_game(banner=INVASION_BANNER)
                        snapshot = scheduler.snapshot

            # one core tick per sensor frame, in arrival order
            while True:
                try:
                    frame = worker.frames.get_nowait()
                except queue.Empty:
                    break
                snapshot = scheduler.tick(frame)

            with worker.lock:
                s_label = status.label
                s_seen = status.body_seen
                s_cam = status.cam_info

            screen.fill((12, 12, 14))
            if snapshot.phase is not Phase.NOT_STARTED:
                draw_grid(screen, snapshot)
            else:
                pygame.draw.rect(screen, ASSET_COLORS["background"], pygame.Rect(0, 0, GRID_PX, GRID_PX))

            hx, hy = snapshot.hand.x, snapshot.hand.y
            if 0 <= hx < GRID_PX and 0 <= hy < GRID_PX:
                pygame.draw.circle(screen, CURSOR, (int(hx), int(hy)), CURSOR_RADIUS, 3)

            panel_x = GRID_PX + 20
            draw_lines(screen, font, snapshot.instruction_text, panel_x, 20, (230, 230, 230))

            if snapshot.status_text:
                screen.blit(big.render(snapshot.status_text, True, (255, 220, 120)), (12, GRID_PX + 14))
            hud = f"Score: {snapshot.score}  Best: {snapshot.high_score}"
            screen.blit(font.render(hud, True, (230, 230, 230)), (GRID_PX // 2, GRID_PX + 18))

            sensor = f"Body: {'YES' if s_seen else 'NO'} | {s_label}"
            screen.blit(font.render(sensor, True, (180, 180, 180)), (panel_x, WIN_H - 56))
            screen.blit(font.render(s_cam, True, (120, 120, 120)), (panel_x, WIN_H - 30))

            pygame.display.flip()
            clock.tick(RENDER_FPS)
    finally:
        scheduler.close()
        if not worker.shutdown():
            logger.warning(f"sensor worker still running after {WORKER_JOIN_TIMEOUT}s")
        pygame.quit()
