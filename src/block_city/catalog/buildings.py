"""Static building catalog: base attributes and upgrade tiers per type."""

from block_city.catalog.types import BuildingProperties, UpgradeTier
from block_city.constants import (
    FIRE_EXTINGUISH_RATE_PER_STATION,
    FIRE_STATION_BASE_COVERAGE_RADIUS,
    FIRE_STATION_MAX_ACTIVE_FIRES,
    HOSPITAL_BASE_PATIENT_CAPACITY,
    HOSPITAL_HEALTH_POINT_CONTRIBUTION,
    HOSPITAL_SERVICE_RADIUS,
    SCHOOL_BASE_STUDENT_CAPACITY,
    SCHOOL_COVERAGE_RADIUS,
    SCHOOL_EDUCATION_POINT_CONTRIBUTION,
    UNIVERSITY_BASE_STUDENT_CAPACITY,
    UNIVERSITY_COVERAGE_RADIUS,
    UNIVERSITY_EDUCATION_POINT_CONTRIBUTION,
)
from block_city.models import BuildingType

BUILDING_CATALOG: dict[BuildingType, BuildingProperties] = {
    BuildingType.RESIDENTIAL: BuildingProperties(
        name="Residential",
        cost=300,
        maintenance_cost=10,
        color=0x22C55E,
        height=15,
        icon="🏠",
        is_flammable=True,
        residential_capacity=50,
        power_demand=5,
        water_demand=3,
        happiness_effect=1,
        upgrades=(
            UpgradeTier(
                name="Residential Level 2",
                cost=450,
                effects={
                    "residential_capacity": 75,
                    "maintenance_cost": 15,
                    "power_demand": 7,
                    "water_demand": 5,
                    "height": 20,
                },
            ),
            UpgradeTier(
                name="Residential Level 3",
                cost=700,
                effects={
                    "residential_capacity": 100,
                    "maintenance_cost": 22,
                    "power_demand": 10,
                    "water_demand": 7,
                    "height": 25,
                },
            ),
        ),
    ),
    BuildingType.COMMERCIAL: BuildingProperties(
        name="Commercial",
        cost=400,
        maintenance_cost=25,
        color=0x3B82F6,
        height=20,
        icon="🏢",
        is_flammable=True,
        jobs_provided=20,
        power_demand=10,
        water_demand=5,
        happiness_effect=1,
        upgrades=(
            UpgradeTier(
                name="Commercial Level 2",
                cost=600,
                effects={
                    "jobs_provided": 30,
                    "maintenance_cost": 38,
                    "power_demand": 15,
                    "water_demand": 8,
                    "height": 25,
                },
            ),
        ),
    ),
    BuildingType.INDUSTRIAL: BuildingProperties(
        name="Industrial",
        cost=550,
        maintenance_cost=40,
        color=0xF59E0B,
        height=25,
        icon="🏭",
        is_flammable=True,
        jobs_provided=30,
        power_demand=20,
        water_demand=10,
        happiness_effect=-4,
        pollution_output=5,
        upgrades=(
            UpgradeTier(
                name="Industrial Level 2",
                cost=850,
                effects={
                    "jobs_provided": 45,
                    "maintenance_cost": 60,
                    "power_demand": 30,
                    "water_demand": 15,
                    "happiness_effect": -5,
                    "height": 30,
                    "pollution_output": 8,
                },
            ),
        ),
    ),
    BuildingType.ROAD: BuildingProperties(
        name="Road",
        cost=30,
        maintenance_cost=3,
        color=0x6B7280,
        height=0.5,
        icon="ରା",
        is_flammable=False,
    ),
    BuildingType.PARK: BuildingProperties(
        name="Park",
        cost=180,
        maintenance_cost=5,
        color=0x84CC16,
        height=2,
        icon="🌳",
        is_flammable=True,
        happiness_effect=5,
        power_demand=1,
        water_demand=2,
        pollution_reduction=1,
        appeal_points=3,
        upgrades=(
            UpgradeTier(
                name="Park Level 2",
                cost=270,
                effects={
                    "happiness_effect": 8,
                    "maintenance_cost": 8,
                    "height": 3,
                    "pollution_reduction": 2,
                    "appeal_points": 5,
                },
            ),
        ),
    ),
    BuildingType.POWER_PLANT: BuildingProperties(
        name="Power Plant",
        cost=1100,
        maintenance_cost=75,
        color=0xEF4444,
        height=30,
        icon="⚡",
        is_flammable=False,
        power_capacity=100,
        water_demand=10,
        happiness_effect=-2,
        pollution_output=8,
        upgrades=(
            UpgradeTier(
                name="Power Plant Level 2",
                cost=1700,
                effects={
                    "power_capacity": 150,
                    "maintenance_cost": 110,
                    "water_demand": 15,
                    "happiness_effect": -3,
                    "height": 35,
                    "pollution_output": 12,
                },
            ),
        ),
    ),
    BuildingType.WATER_TOWER: BuildingProperties(
        name="Water Tower",
        cost=700,
        maintenance_cost=30,
        color=0x0EA5E9,
        height=28,
        icon="💧",
        is_flammable=False,
        water_capacity=80,
        power_demand=10,
    ),
    BuildingType.FIRE_STATION: BuildingProperties(
        name="Fire Station",
        cost=1400,
        maintenance_cost=100,
        color=0xDC2626,
        height=22,
        icon="🚒",
        is_flammable=False,
        power_demand=15,
        water_demand=5,
        fire_fighting_power=FIRE_EXTINGUISH_RATE_PER_STATION,
        fire_coverage_radius=FIRE_STATION_BASE_COVERAGE_RADIUS,
        max_active_fires_handled=FIRE_STATION_MAX_ACTIVE_FIRES,
    ),
    BuildingType.HOSPITAL: BuildingProperties(
        name="Hospital",
        cost=1700,
        maintenance_cost=125,
        color=0x4ADE80,
        height=26,
        icon="🏥",
        is_flammable=False,
        power_demand=20,
        water_demand=10,
        patient_capacity=HOSPITAL_BASE_PATIENT_CAPACITY,
        health_point_contribution=HOSPITAL_HEALTH_POINT_CONTRIBUTION,
        health_service_radius=HOSPITAL_SERVICE_RADIUS,
    ),
    BuildingType.SCHOOL: BuildingProperties(
        name="School",
        cost=1000,
        maintenance_cost=60,
        color=0xFACC15,
        height=18,
        icon="🏫",
        is_flammable=False,
        power_demand=10,
        water_demand=8,
        student_capacity=SCHOOL_BASE_STUDENT_CAPACITY,
        education_point_contribution=SCHOOL_EDUCATION_POINT_CONTRIBUTION,
        education_coverage_radius=SCHOOL_COVERAGE_RADIUS,
        happiness_effect=2,
        upgrades=(
            UpgradeTier(
                name="School Level 2",
                cost=1400,
                effects={
                    "student_capacity": 220,
                    "maintenance_cost": 90,
                    "education_point_contribution": 30,
                    "height": 20,
                    "happiness_effect": 3,
                },
            ),
        ),
    ),
    BuildingType.UNIVERSITY: BuildingProperties(
        name="University",
        cost=2500,
        maintenance_cost=175,
        color=0x8B5CF6,
        height=32,
        icon="🎓",
        is_flammable=False,
        power_demand=30,
        water_demand=15,
        student_capacity=UNIVERSITY_BASE_STUDENT_CAPACITY,
        education_point_contribution=UNIVERSITY_EDUCATION_POINT_CONTRIBUTION,
        education_coverage_radius=UNIVERSITY_COVERAGE_RADIUS,
        happiness_effect=4,
        upgrades=(
            UpgradeTier(
                name="University Level 2",
                cost=3400,
                effects={
                    "student_capacity": 750,
                    "maintenance_cost": 250,
                    "education_point_contribution": 90,
                    "height": 36,
                    "happiness_effect": 6,
                },
            ),
        ),
    ),
    BuildingType.WASTE_MANAGEMENT: BuildingProperties(
        name="Waste Management",
        cost=1200,
        maintenance_cost=90,
        color=0x4FD1C5,
        height=20,
        icon="♻️",
        is_flammable=True,
        power_demand=12,
        water_demand=4,
        pollution_reduction=20,
        happiness_effect=-1,
    ),
    BuildingType.LANDMARK: BuildingProperties(
        name="Statue",
        cost=2800,
        maintenance_cost=100,
        color=0xA0AEC0,
        height=26,
        icon="🗿",
        is_flammable=False,
        power_demand=5,
        water_demand=3,
        happiness_effect=2,
        appeal_points=25,
    ),
}


def get_properties(building_type: BuildingType) -> BuildingProperties:
    """Look up the base descriptor for a building type."""
    return BUILDING_CATALOG[BuildingType(building_type)]
