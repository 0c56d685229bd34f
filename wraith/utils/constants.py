"""Game configuration constants for the turn engine."""

# Calendar
QUARTERS_PER_YEAR = 4  # one turn is one quarter

# Production pipeline
STAGE_COUNT = 4  # 25%, 50%, 75%, 100% completion

# Labor required per active production unit
PROFESSIONALS_PER_UNIT = 1
UNSKILLED_PER_UNIT = 3

# Population
BIRTH_RATE = 0.0025  # 0.25% per year baseline

# Hull kinds that must run life support
LIFE_SUPPORT_HULL_KINDS = ("enclosed", "orbital", "ship")

# Farm units that run on solar power when close enough to the star
SOLAR_FARM_CODES = ("FRM-2", "FRM-3", "FRM-4", "FRM-5")
SOLAR_MAX_ORBIT = 5

# Catalog
MAX_TECH_LEVEL = 10

# Phase sequence used by the command line and server when none is given.
# The engine itself imposes no ordering.
DEFAULT_PHASES = (
    "fuel-allocation",
    "labor-allocation",
    "life-support",
    "farm-production",
    "mine-production",
    "factory-production",
    "retool",
    "assembly",
    "control",
)

# Galaxy generation
GALAXY_RADIUS = 15
ORBITS_PER_STAR = 10
HOME_ORBIT = 3

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing

# Persistence
STATE_DIR_NAME = "state"  # relative save paths resolve under this directory
