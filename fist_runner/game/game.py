# fist_runner/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_r, K_m
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, JUMP_REQUIRES_RELEASE, CAMERA_INDEX,
    COLOR_FG, COLOR_OK, COLOR_WARN
)
from .render import draw_world
from .simulation import Simulation, GameStatus, LoggingListener

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Fist Runner: close your hand to jump.")
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each run.")
    p.add_argument("--camera", action="store_true",
                   help="Jump with a closed fist seen by the webcam (needs the 'camera' extra).")
    p.add_argument("--camera-index", type=int, default=CAMERA_INDEX)
    p.add_argument("--no-preview", action="store_true", help="Hide the camera preview window")
    p.add_argument("--require-release", action="store_true", default=JUMP_REQUIRES_RELEASE,
                   help="Open the hand between jumps instead of re-jumping on landing.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def _resolve_seed(seed_arg):
    # None -> SEED_DEFAULT; -1 -> random every run
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


def _center_text(screen, font, msg, y, color=COLOR_FG):
    surf = font.render(msg, True, color)
    screen.blit(surf, (WIDTH // 2 - surf.get_width() // 2, y))


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    signal = tracker = None
    if args.camera:
        # Imported lazily: OpenCV/MediaPipe are only needed for camera play.
        from fist_runner.gesture.signal import GestureSignal
        from fist_runner.gesture.tracker import HandTracker
        signal = GestureSignal()
        tracker = HandTracker(signal, camera_index=args.camera_index, show_preview=not args.no_preview)
        tracker.start()

    sim = Simulation(seed=_resolve_seed(args.seed), listener=LoggingListener(),
                     require_release=args.require_release)

    pygame.init()
    pygame.display.set_caption("Fist Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 20, bold=True)
    big = pygame.font.SysFont("arial", 40, bold=True)

    try:
        while True:
            clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == K_ESCAPE:
                        return
                    if event.key == K_RETURN and sim.status == GameStatus.IDLE:
                        sim.start()
                    elif event.key == K_r and sim.status == GameStatus.OVER:
                        sim.restart()
                    elif event.key == K_m and sim.status == GameStatus.OVER:
                        sim.return_to_menu()

            if signal is not None:
                jumping = signal.latest()
            else:
                jumping = pygame.key.get_pressed()[K_SPACE]

            sim.tick(jumping)

            # --- Render ---
            alive = sim.status != GameStatus.OVER
            draw_world(screen, sim.level, sim.player, sim.scroll, alive)

            hud = f"Score: {sim.score}   Best: {sim.high_score}   Seed: {sim.seed}"
            screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
            hand_txt = "FIST (JUMP!)" if jumping else "close your hand to jump"
            screen.blit(font.render(hand_txt, True, COLOR_OK if jumping else COLOR_WARN), (12, 34))

            if sim.status == GameStatus.IDLE:
                _center_text(screen, big, "FIST RUNNER", HEIGHT // 2 - 70)
                _center_text(screen, font, "ENTER to start | fist or SPACE to jump | ESC quit", HEIGHT // 2 - 10)
            elif sim.status == GameStatus.OVER:
                _center_text(screen, big, f"Game over - score {sim.score}", HEIGHT // 2 - 70)
                _center_text(screen, font, "R restart | M menu | ESC quit", HEIGHT // 2 - 10)

            pygame.display.flip()
    finally:
        if tracker is not None:
            tracker.stop()
        pygame.quit()


if __name__ == "__main__":
    run()
    sys.exit(0)
