"""Game rule constants for the Block City simulation.

Values are tuned for a 24x24 grid where one tick is one simulated month.
"""

GRID_SIZE = 24

# Starting city
INITIAL_FUNDS = 50000
INITIAL_POPULATION = 0
INITIAL_HAPPINESS = 65
INITIAL_MONTH = 1
INITIAL_HEALTH_LEVEL = 85
INITIAL_SAFETY_LEVEL = 100
INITIAL_EDUCATION_LEVEL = 55
INITIAL_POLLUTION_LEVEL = 0
INITIAL_APPEAL = 10
INITIAL_TOURISTS = 0

# Economy
MONTHLY_TAX_PER_CAPITA = 25
TOURIST_INCOME_PER_TOURIST = 20
DEMOLITION_REFUND_RATIO = 0.3
UNEMPLOYMENT_THRESHOLD = 0.1
UNEMPLOYMENT_HAPPINESS_FACTOR = 30
LOW_FUNDS_THRESHOLD = 0
DEEP_DEBT_THRESHOLD = -10000
LOW_FUNDS_HAPPINESS_PENALTY = 10
DEEP_DEBT_HAPPINESS_PENALTY = 15

# Utilities
NO_POWER_HAPPINESS_PENALTY = 15
NO_WATER_HAPPINESS_PENALTY = 5

# Industry vs. green space
INDUSTRY_PARK_RATIO = 1.5
INDUSTRY_HAPPINESS_PENALTY_PER_BUILDING = 2.5

BASE_BUILDING_LEVEL = 1

# Fire
MAX_FIRE_HEALTH = 100
FIRE_START_CHANCE_PER_TICK_PER_BUILDING = 0.00005
FIRE_SPREAD_CHANCE = 0.1
FIRE_SPREAD_HEALTH_THRESHOLD = 0.7
FIRE_DAMAGE_RATE = 2
FIRE_EXTINGUISH_RATE_PER_STATION = 5
FIRE_STATION_BASE_COVERAGE_RADIUS = 5
FIRE_STATION_MAX_ACTIVE_FIRES = 1
ACTIVE_FIRE_HAPPINESS_PENALTY = 5
SAFETY_PENALTY_PER_ACTIVE_FIRE = 20
DEMOLITION_DAMAGE_THRESHOLD = 0.5

# Health
HOSPITAL_BASE_PATIENT_CAPACITY = 200
HOSPITAL_HEALTH_POINT_CONTRIBUTION = 50
HOSPITAL_SERVICE_RADIUS = 7
HOSPITAL_PATIENT_RATIO = 0.5
NO_HOSPITAL_HEALTH_LEVEL = 50
HEALTH_PENALTY_THRESHOLD = 35
SAFETY_PENALTY_THRESHOLD = 55

# Education
SCHOOL_BASE_STUDENT_CAPACITY = 150
SCHOOL_EDUCATION_POINT_CONTRIBUTION = 20
SCHOOL_COVERAGE_RADIUS = 6
UNIVERSITY_BASE_STUDENT_CAPACITY = 500
UNIVERSITY_EDUCATION_POINT_CONTRIBUTION = 60
UNIVERSITY_COVERAGE_RADIUS = 10
EDUCATION_PENALTY_THRESHOLD = 25
POPULATION_REQUIRING_EDUCATION_RATIO = 0.3
EDUCATION_CAPACITY_WEIGHT = 70
EDUCATION_QUALITY_WEIGHT = 30
EDUCATION_POINTS_BONUS_FACTOR = 0.05
EDUCATION_READY_LEVEL = 75
EDUCATION_GRACE_POPULATION = 15
EDUCATION_DECLINE_POPULATION = 40
EDUCATION_DECLINE_FLOOR = 30
EDUCATION_DECLINE_DIVISOR = 1.5
UNEDUCATED_LEVEL = 25

# Pollution
MAX_POLLUTION_UNITS_FOR_MAX_LEVEL = 100
POLLUTION_HAPPINESS_FACTOR = 0.05
POLLUTION_HEALTH_IMPACT_THRESHOLD = 50
POLLUTION_HEALTH_PENALTY_FACTOR = 0.05

# Appeal and tourism
MAX_APPEAL_UNITS_FOR_MAX_LEVEL = 200
INTRINSIC_APPEAL_BONUS = 5
INTRINSIC_APPEAL_MAX_POLLUTION = 40
POLLUTION_APPEAL_PENALTY_FACTOR = 0.35
DERELICT_BUILDING_APPEAL_PENALTY = 3
HAPPINESS_APPEAL_BONUS_FACTOR = 0.1
EDUCATION_APPEAL_BONUS_FACTOR = 0.15
TOURISTS_PER_APPEAL = 2.5
TOURISTS_PER_APPEAL_POINT = 0.5
COMMERCIAL_CAPACITY_PER_TOURIST_RATIO = 4

# Population dynamics
GROWTH_TIERS: tuple[tuple[int, float], ...] = (
    (80, 0.06),
    (60, 0.04),
    (40, 0.02),
)
RESIDENTIAL_GROWTH_FACTOR = 0.005
TOURIST_GROWTH_APPEAL_THRESHOLD = 70
TOURIST_GROWTH_FACTOR = 0.01
POLLUTION_GROWTH_MARGIN = 20
SEVERE_POLLUTION_LEVEL = 75
JOBS_POPULATION_SOFT_CAP = 1.25

DEPARTURE_VERY_UNHAPPY_THRESHOLD = 25
DEPARTURE_UNHAPPY_THRESHOLD = 40
DEPARTURE_VERY_UNHAPPY = 0.06
DEPARTURE_UNHAPPY = 0.03
DEPARTURE_NO_WATER = 0.08
DEPARTURE_UNHEALTHY = 0.06
DEPARTURE_UNSAFE = 0.07
DEPARTURE_UNEDUCATED = 0.04
DEPARTURE_POLLUTED = 0.05

# History
MAX_HISTORY_ENTRIES = 240

# Planner
AI_PLANNER_COOLDOWN_MONTHS = 3
AI_PLANNER_MIN_FUNDS_TO_ACT = 100
AI_MAX_ACTIONS_PER_TURN = 3
AI_MAX_EMPTY_CELLS_TO_SHOW = 40
AI_FOCUS_EMPTY_CELLS = 10
AI_BOOTSTRAP_CENTER_SPAN = 5
AI_POWER_HEADROOM = 1.2
AI_WATER_HEADROOM = 1.2
AI_RESIDENTIAL_PRESSURE = 0.85
AI_RESIDENTIAL_MIN_HAPPINESS = 45
AI_JOBS_PRESSURE = 1.15
AI_PARK_HAPPINESS_THRESHOLD = 60
AI_POWER_UPGRADE_HEADROOM = 1.3
AI_RESIDENTIAL_UPGRADE_PRESSURE = 0.9

# Timing
GAME_TICK_INTERVAL_SECONDS = 2.5
AI_PLANNER_INTERVAL_SECONDS = GAME_TICK_INTERVAL_SECONDS / 2
