"""
Restaurant type benchmarks for the Indian market.

Each restaurant type carries industry ranges for its cost and revenue ratios,
plus the problems, staffing and seasonal/city/regional patterns typical of
that kind of outlet. Ranges are "min-max" strings; INR amounts use the lakh
suffix ("3L-12L"). Seasonal and city tier effects are signed percentages
("+35", "-12"); regional notes are qualitative.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RestaurantType(str, Enum):
    CAFE = "cafe"
    QSR = "qsr"
    FINE_DINE = "fine_dine"
    PUB_RESTOBAR = "pub_restobar"
    CLOUD_KITCHEN = "cloud_kitchen"
    BAKERY = "bakery"
    FOOD_TRUCK = "food_truck"


class CityTier(str, Enum):
    METRO = "metro"
    TIER_1 = "tier_1"
    TIER_2 = "tier_2"
    TIER_3 = "tier_3"


class Season(str, Enum):
    SUMMER = "summer"
    MONSOON = "monsoon"
    WINTER = "winter"


class Region(str, Enum):
    SOUTH = "south"
    NORTH = "north"
    WEST = "west"
    EAST = "east"


@dataclass(frozen=True)
class RestaurantProfile:
    core_benchmarks: dict[str, str]
    common_problems: list[str]
    staff_structure: list[str] = field(default_factory=list)
    seasonal_effects: dict[str, dict[str, str]] = field(default_factory=dict)
    city_tier_adjustments: dict[str, dict[str, str]] = field(default_factory=dict)
    regional_adjustments: dict[str, dict[str, str]] = field(default_factory=dict)
    cuisine_variations: dict[str, dict[str, Any]] = field(default_factory=dict)


RESTAURANT_BENCHMARKS: dict[str, RestaurantProfile] = {
    RestaurantType.CAFE.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "32-38",
            "staff_cost_percent_range": "18-25",
            "marketing_percent_range": "5-8",
            "rent_percent_of_revenue": "12-18",
            "electricity_percent": "4-7",
            "waste_percent_range": "3-5",
            "delivery_ratio_percent": "25-40",
            "dinein_ratio_percent": "60-75",
            "avg_ticket_size_range_inr": "250-450",
            "monthly_revenue_range_inr": "3L-12L",
            "monthly_profit_margin_percent": "12-18",
            "seating_capacity_norm": "20-60",
            "equipment_investment_range_inr": "4L-10L",
            "kitchen_size_sqft_range": "80-150",
            "ideal_staff_count_range": "6-14",
        },
        staff_structure=[
            "1-2 baristas",
            "1-2 kitchen staff",
            "1 cashier",
            "1 floor staff",
            "1 cleaning/helper",
            "Optional pastry chef",
        ],
        common_problems=[
            "High metro rents",
            "Unstable staff skill",
            "Coffee bean price fluctuations",
            "Season-dependent footfall",
            "Delivery commission issues",
            "High electricity consumption",
        ],
        seasonal_effects={
            "summer": {"cold_beverages_sales_boost": "+35", "hot_sales_drop": "-12"},
            "monsoon": {"footfall_drop": "-8", "snack_demand": "+12"},
            "winter": {"hot_coffee_boost": "+22", "desserts_boost": "+18"},
        },
        city_tier_adjustments={
            "metro": {
                "rent_increase_percent": "+30",
                "salary_increase_percent": "+18",
                "ticket_size_variation": "+22",
            },
            "tier_1": {"rent_increase_percent": "+15", "salary_increase_percent": "+10"},
            "tier_2": {"rent_variation": "+5", "ticket_size_variation": "-5"},
            "tier_3": {"rent_variation": "-10", "ticket_size_variation": "-15"},
        },
        regional_adjustments={
            "south": {"coffee_preference": "High", "milk_usage": "High"},
            "north": {"milkshake_demand": "High"},
            "west": {"cold_coffee_preference": "Very High"},
            "east": {"tea_preference": "Higher than coffee"},
        },
    ),
    RestaurantType.QSR.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "28-35",
            "staff_cost_percent_range": "14-20",
            "marketing_percent_range": "3-7",
            "rent_percent_of_revenue": "10-14",
            "electricity_percent": "5-8",
            "waste_percent_range": "4-7",
            "delivery_ratio_percent": "60-75",
            "dinein_ratio_percent": "25-40",
            "avg_ticket_size_range_inr": "150-300",
            "monthly_revenue_range_inr": "4L-18L",
            "monthly_profit_margin_percent": "10-15",
        },
        common_problems=[
            "Delivery commissions 25-30%",
            "Vegetable and oil price spikes",
            "Peak-hour bottlenecks",
            "Prep inconsistency",
            "High packaging cost",
        ],
        seasonal_effects={
            "summer": {"beverage_boost": "+20"},
            "monsoon": {"fried_sales_boost": "+30"},
            "winter": {"rolls_boost": "+25"},
        },
        cuisine_variations={
            "burger_qsr": {"food_cost": "30-35", "top_items": ["Chicken Burger", "Veg Burger"]},
            "biryani_qsr": {"food_cost": "32-40", "oil_usage": "High"},
            "roll_qsr": {"food_cost": "28-34", "top_items": ["Paneer Roll", "Egg Roll"]},
        },
        city_tier_adjustments={
            "metro": {"rent": "+22", "salary": "+15", "ticket_size": "+18"},
            "tier_2": {"ticket_size": "-5", "dinein_increase": "+15"},
        },
    ),
    RestaurantType.FINE_DINE.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "30-40",
            "staff_cost_percent_range": "22-30",
            "marketing_percent_range": "4-7",
            "rent_percent_of_revenue": "12-20",
            "avg_ticket_size_range_inr": "600-1500",
            "profit_margin_percent": "8-12",
            "seating_capacity_norm": "40-120",
        },
        staff_structure=[
            "Executive Chef",
            "Sous Chef",
            "Commis",
            "Stewards",
            "Hostess",
            "Biller",
        ],
        common_problems=[
            "High staff cost",
            "Footfall instability",
            "High expectations",
            "Food wastage from fine plating",
            "Rental burden",
        ],
    ),
    RestaurantType.PUB_RESTOBAR.value: RestaurantProfile(
        core_benchmarks={
            "liquor_cost_percent_range": "18-25",
            "food_cost_percent_range": "28-35",
            "staff_cost_percent_range": "20-28",
            "rent_percent_of_revenue": "15-25",
            "avg_ticket_size_range_inr": "800-2000",
            "waste_percent_range": "5-10",
        },
        common_problems=[
            "Excise issues",
            "Liquor pilferage",
            "Weekend dependency",
            "Police checks",
            "High licensing cost",
        ],
    ),
    RestaurantType.CLOUD_KITCHEN.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "28-34",
            "staff_cost_percent_range": "10-16",
            "marketing_percent_range": "8-15",
            "delivery_ratio_percent": "85-95",
            "avg_ticket_size_range_inr": "120-250",
            "profit_margin_range_percent": "12-20",
            "waste_percent_range": "3-6",
        },
        common_problems=[
            "Delivery partner dependency",
            "Refunds/cancellations",
            "Brand discovery issues",
            "Packaging costs",
        ],
    ),
    RestaurantType.BAKERY.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "32-40",
            "staff_cost_percent_range": "16-22",
            "waste_percent_range": "7-12",
            "avg_ticket_size_range_inr": "100-250",
        },
        common_problems=[
            "Shelf-life issues",
            "Festive season spikes",
            "Unsold inventory wastage",
        ],
    ),
    RestaurantType.FOOD_TRUCK.value: RestaurantProfile(
        core_benchmarks={
            "food_cost_percent_range": "28-36",
            "staff_cost_percent_range": "10-14",
            "waste_percent_range": "3-6",
            "avg_ticket_size_range_inr": "80-200",
            "monthly_revenue_range_inr": "1.5L-6L",
            "profit_margin_percent_range": "12-20",
        },
        common_problems=[
            "Location instability",
            "Weather dependency",
            "Parking permissions",
            "Limited storage",
        ],
    ),
}

RESTAURANT_TYPE_DISPLAY_NAMES: dict[str, str] = {
    RestaurantType.CAFE.value: "Café",
    RestaurantType.QSR.value: "Quick Service Restaurant (QSR)",
    RestaurantType.FINE_DINE.value: "Fine Dining",
    RestaurantType.PUB_RESTOBAR.value: "Pub/Restobar",
    RestaurantType.CLOUD_KITCHEN.value: "Cloud Kitchen",
    RestaurantType.BAKERY.value: "Bakery",
    RestaurantType.FOOD_TRUCK.value: "Food Truck",
}
