# --- Display ---
WIDTH = 800
HEIGHT = 450                # bottom of the playfield; falling past it ends the run
FPS = 60

# --- World / Physics (per tick, one tick per rendered frame) ---
GRAVITY = 0.45              # floaty on purpose
JUMP_VELOCITY = -13.0       # impulse applied on jump (negative = up)
SCROLL_SPEED = 2.5          # world units scrolled per tick

# --- Player ---
PLAYER_X = 100              # player's fixed x on screen (world scrolls left)
PLAYER_SIZE = 50
HITBOX_INSET = 5            # horizontal skin so edges don't snag
LANDING_TOLERANCE = 25.0    # downward slack below a surface that still counts as landing

# --- Level generation ---
GROUND_Y = HEIGHT - 100     # top surface of every platform
INITIAL_PLATFORM_W = 600    # first platform, always safe
GAP_MIN_W = 40
GAP_MAX_W = 110             # max jumpable is ~144 with the physics above
PLATFORM_MIN_W = 180
PLATFORM_MAX_W = 430
PLATFORM_BUFFER = 5         # live platforms kept ahead of the player
JUMP_SAFETY_MARGIN = 30.0   # subtracted from the analytic jump distance
SEED_DEFAULT = 12345

# --- Gesture ---
NUM_LANDMARKS = 21
FINGERTIP_IDS = (8, 12, 16, 20)   # index, middle, ring, pinky tips
FINGER_MCP_IDS = (5, 9, 13, 17)   # matching knuckles
FIST_MIN_FOLDED = 3
JUMP_REQUIRES_RELEASE = False     # True = reopen the hand between jumps

# --- Camera ---
CAMERA_INDEX = 0
CAMERA_W = 320
CAMERA_H = 240
HANDS_MAX_NUM = 1
HANDS_MODEL_COMPLEXITY = 1
HANDS_MIN_DETECTION = 0.7
HANDS_MIN_TRACKING = 0.7

# --- Colors (RGB) ---
COLOR_SKY_TOP = (135, 206, 235)
COLOR_SKY_BOT = (224, 247, 250)
COLOR_FG = (40, 40, 60)
COLOR_PLAYER = (255, 77, 77)
COLOR_PLAYER_DEAD = (120, 120, 130)
COLOR_GRASS = (76, 175, 80)
COLOR_DIRT = (121, 85, 72)
COLOR_OK = (76, 175, 80)
COLOR_WARN = (229, 57, 53)
