# viz/renderer_colors.py
BG = (15, 22, 42)                 # #0f162a
GRID = (255, 255, 255, 8)         # white @ 0.03
SNAKE = (34, 211, 238)            # #22d3ee
SNAKE_HEAD = (103, 232, 249)      # #67e8f9
FOOD_APPLE_GLOW = (217, 70, 239)  # #d946ef
FOOD_ANIMAL_GLOW = (251, 191, 36) # #fbbf24
TEXT = (226, 232, 240)
TEXT_DIM = (148, 163, 184)
OVERLAY = (2, 6, 23, 170)

# body gradient endpoints (head side -> tail side)
BODY_NEAR = (34, 211, 238)
BODY_FAR = (20, 150, 200)
BODY_ALPHA_NEAR, BODY_ALPHA_FAR = 0.95, 0.15
BODY_BLUR_NEAR, BODY_BLUR_FAR = 8.0, 2.0
BODY_PADDING = 2
BODY_RADIUS = 4
HEAD_BLUR = 15.0
FOOD_BLUR = 15.0
