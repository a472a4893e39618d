"""
Meltdown — Live Window Host

Plays the melt sequence in a pygame window at a fixed frame rate.

Hotkeys:
  Space  = pause/resume
  /      = skip to the next phase
  R      = recapture the screen (or reload the image given with --image)
  Esc    = close

Loop order per frame:
  1. Handle events (keys, resize, close) first
  2. Tick the sequence (ambient state + phase timeout)
  3. Paint (render + render-triggered phase advance)
  4. Blit + HUD, then wait for the next frame slot
"""

import time

import numpy as np

try:
    import pygame
except ImportError:
    pygame = None

from core.capture import capture_screen, load_image, CaptureError
from core.finalizer import write_and_open
from core.safety import SafetyError, clamp_size
from core.sequence import MeltSequence
from effects import draw_hud

# --- Configuration ---
APP_TITLE = "MOGGADO — Simulated Melt (safe)"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
MIN_WIDTH = 800
MIN_HEIGHT = 600
FPS = 30   # ~33ms per tick


class MeltPlayer:
    """pygame window driving a MeltSequence.

    Args:
        image_path: Image file to melt. None = grab the screen at startup.
        size: Initial window (width, height).
        fps: Tick rate.
        seed: Random seed for the sequence.
        fullscreen: Open a borderless full-screen window instead.
        handoff: Final text writer/opener passed through to the sequence.
        clock: Zero-arg callable returning seconds (monotonic). Injected in tests.
        capture: Zero-arg callable returning an RGB array of the screen.
    """

    def __init__(self, image_path=None, size=(WINDOW_WIDTH, WINDOW_HEIGHT), fps=FPS,
                 seed=None, fullscreen=False, handoff=write_and_open,
                 clock=time.monotonic, capture=capture_screen):
        if pygame is None:
            raise RuntimeError("pygame required for the live window. Install: pip install pygame")

        w, h = clamp_size(size)
        self.size = (max(MIN_WIDTH, w), max(MIN_HEIGHT, h)) if not fullscreen else (w, h)
        self.fps = max(1, int(fps))
        self.fullscreen = fullscreen
        self.image_path = image_path
        self.running = True
        self.frame_index = 0

        self._clock_fn = clock
        self._capture = capture
        self._screen = None
        self._clock = None

        self.sequence = MeltSequence(self.size, seed=seed, handoff=handoff)

    def _now(self) -> float:
        return self._clock_fn() * 1000.0

    def acquire_source(self):
        """Load the image or grab the screen, then restart the sequence.

        Failures are reported and leave the current buffer in place, so the
        window still opens on a black background. Returns False when no new
        source took effect (acquisition failed or the sequence has finished).
        """
        if self.sequence.finished:
            print("  Sequence finished; recapture ignored")
            return False
        try:
            if self.image_path:
                image = load_image(self.image_path)
            else:
                image = self._capture()
        except (CaptureError, SafetyError, FileNotFoundError) as e:
            print(f"  Source unavailable: {e}")
            return False
        return self.sequence.set_source(image, self._now())

    def init_display(self):
        """Initialize the pygame window."""
        pygame.init()
        if self.fullscreen:
            self._screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            self.size = self._screen.get_size()
            self.sequence.on_resize(self.size)
        else:
            self._screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
        pygame.display.set_caption(APP_TITLE)
        self._clock = pygame.time.Clock()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                w = max(MIN_WIDTH, event.w)
                h = max(MIN_HEIGHT, event.h)
                self.size = (w, h)
                if (w, h) != (event.w, event.h):
                    self._screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
                self.sequence.on_resize(self.size)

            elif event.type == pygame.KEYDOWN:
                now = self._now()
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    paused = self.sequence.toggle_pause(now)
                    print(f"  [{'PAUSED' if paused else 'PLAYING'}]")
                elif event.key == pygame.K_SLASH:
                    self.sequence.skip(now)
                    if self.sequence.finished:
                        print("  [FINISHED]")
                    else:
                        print(f"  [PHASE {self.sequence.phase}]")
                elif event.key == pygame.K_r:
                    if self.acquire_source():
                        print("  [RECAPTURED]")

    def _render_to_screen(self, frame: np.ndarray):
        frame = draw_hud(frame, self.sequence.phase,
                         paused=self.sequence.paused, finished=self.sequence.finished)
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    def run(self, max_frames=None):
        """Main loop. Blocks until the window closes (or max_frames elapse)."""
        if not self.acquire_source():
            self.sequence.start(self._now())
        self.init_display()

        print(f"\n  {APP_TITLE}")
        print("  " + "─" * 40)
        print("  Space=Pause  /=Next phase  R=Recapture  Esc=Close")
        print()

        try:
            while self.running:
                self._handle_events()
                if not self.running:
                    break

                now = self._now()
                self.sequence.on_tick(now)
                frame = self.sequence.on_paint(now)
                self._render_to_screen(frame)

                self.frame_index += 1
                if max_frames is not None and self.frame_index >= max_frames:
                    break
                self._clock.tick(self.fps)

        except KeyboardInterrupt:
            print("\n  [INTERRUPTED]")
        finally:
            self._cleanup()

    def _cleanup(self):
        if pygame and pygame.get_init():
            pygame.quit()
