# Size of regions used to partition the world (x, y and z).
REGION_SIZE = 16

# Regions are kept loaded within this Chebyshev distance (in regions) of the observer.
LOAD_RADIUS = 3

# Region y of the single layer that activation fills.
GROUND_LAYER = 0

# Reach of break/place in world units.
MAX_INTERACTION_DISTANCE = 5.0
# Upper bound on DDA iterations for a single ray.
RAYCAST_MAX_STEPS = 100

# Terrain generation
WORLD_SEED = 42
TERRAIN_SCALE = 0.02
BIOME_SCALE = 0.01
HEIGHT_MULTIPLIER = 12.0
HEIGHT_OFFSET = 15.0
SAND_BIOME_THRESHOLD = 0.6
# Depth of the dirt band under the surface; terrain at or below this height gets none.
DIRT_DEPTH = 3

# Block placed for each held key, checked in this order.
PLACE_KEY_BLOCKS = (
    ('1', 'Dirt'),
    ('2', 'Stone'),
    ('3', 'Grass'),
)
DEFAULT_PLACE_BLOCK = 'Dirt'

# Edge length of the translucent cube drawn around the targeted cell.
HIGHLIGHT_SIZE = 1.05

# Ambient occlusion settings (darken inner edges/corners of exposed faces).
AO_ENABLED = True

# Enable ANSI colors in logs.
LOG_COLOR = True

# Log region activation/removal.
LOG_REGIONS = True

# Logging for mesh activity.
LOG_MESH = False

# Log break/place edits.
LOG_INTERACTION = True
