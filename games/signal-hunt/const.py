# Background rain
RAIN_COLOR = (0, 255, 0)
RAIN_COLOR_CHAOS = (255, 0, 0)     # chaos difficulty
RAIN_ALPHA = 0.4

# Target / explosion
TARGET_COLOR = (0, 255, 255)
PARTICLE_COLOR = (0, 255, 255)
PARTICLE_GLOW = (0, 160, 160)
SHAKE_PX = 4                       # max screen shake offset on hit

# Text
HUD_COLOR = (0, 255, 255)
HIT_TEXT_COLOR = (0, 255, 120)
MISS_TEXT_COLOR = (255, 60, 60)
COMBO_TEXT_COLOR = (255, 220, 0)
TITLE_COLOR = (0, 255, 0)
GAME_OVER_COLOR = (255, 0, 0)
WARNING_COLOR = (255, 0, 0)
DEBUG_COLOR = (160, 160, 160)

# Screens
OVERLAY_ALPHA = 140                # dim behind pause / game over
BUTTON_W = 180
BUTTON_H = 52
BUTTON_GAP = 18
PAUSE_BTN_W = 120
PAUSE_BTN_H = 40
SCORES_SHOWN = 10
