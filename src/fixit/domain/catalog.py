"""Static service catalog.

The catalog is read-only reference data. Bookings store the display label
``"Category - Subcategory"`` rather than IDs, so mapping a booking back to
its category relies on matching display names.
"""

from dataclasses import dataclass
from typing import Optional

PROVINCES = (
    "Cairo",
    "Giza",
    "Alexandria",
    "Qalyubia",
    "Sharqia",
    "Gharbia",
)


@dataclass(frozen=True)
class Subcategory:
    """Bookable service within a category."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class Category:
    """Service category with its bookable subcategories."""

    id: str
    name: str
    description: str
    details: str
    subcategories: tuple[Subcategory, ...]


# (id, name, description, details, [(sub_id, sub_name, sub_description), ...])
SERVICE_TABLE = [
    (
        "electricity",
        "Electricity",
        "Electrical maintenance – repairs – installation",
        "Complete electrical services including fault repairs, new panel installation, "
        "cable extension, and electrical device installation with work guarantee.",
        [
            ("elec_repair", "Electrical Repairs", "Fix electrical faults and issues"),
            ("elec_installation", "Panel Installation", "Install new electrical panels"),
            ("elec_wiring", "Wiring & Cabling", "Wire extension and cable installation"),
            ("elec_appliance", "Appliance Installation", "Install electrical appliances"),
        ],
    ),
    (
        "plumbing",
        "Plumbing",
        "Leak repairs – faucet installation",
        "Professional plumbing services for leak repairs and pipe blockages, installation "
        "of new faucets and mixers, and periodic maintenance of water networks.",
        [
            ("plumb_leak", "Leak Repairs", "Fix water leaks and drips"),
            ("plumb_faucet", "Faucet Installation", "Install new faucets and taps"),
            ("plumb_pipe", "Pipe Repair", "Fix blocked or broken pipes"),
            ("plumb_toilet", "Toilet Services", "Toilet repair and installation"),
        ],
    ),
    (
        "ac",
        "Air Conditioning",
        "AC installation and maintenance",
        "Installation and maintenance of all types of air conditioning units, regular "
        "cleaning and maintenance, and refrigerant charging with comprehensive performance check.",
        [
            ("ac_install", "AC Installation", "Install new AC units"),
            ("ac_repair", "AC Repair", "Fix AC problems and issues"),
            ("ac_cleaning", "AC Cleaning", "Deep cleaning and maintenance"),
            ("ac_gas", "Gas Charging", "Refrigerant gas refill"),
        ],
    ),
    (
        "carpentry",
        "Carpentry",
        "Manufacturing and installation of furniture and wooden works",
        "Carpentry services including manufacturing and installation of doors, windows, "
        "furniture, and kitchens with highest quality and custom designs.",
        [
            ("carp_door", "Doors & Windows", "Install doors and windows"),
            ("carp_furniture", "Furniture Making", "Custom furniture manufacturing"),
            ("carp_kitchen", "Kitchen Cabinets", "Design and install kitchen cabinets"),
            ("carp_repair", "Furniture Repair", "Repair damaged furniture"),
        ],
    ),
    (
        "car_wash",
        "Home Car Wash",
        "Professional car washing and detailing at your location",
        "Complete car wash and detailing services at your home or office. Includes exterior "
        "wash, interior cleaning, waxing, and polishing. We bring all equipment to you.",
        [
            ("wash_basic", "Basic Wash", "Exterior wash and dry"),
            ("wash_full", "Full Service", "Exterior + interior cleaning"),
            ("wash_detailing", "Car Detailing", "Complete detailing and polishing"),
            ("wash_wax", "Wax & Polish", "Waxing and paint protection"),
        ],
    ),
    (
        "mechanic",
        "Mechanic to Home",
        "Mobile mechanic services – repairs at your location",
        "Professional mobile mechanic services for car repairs, maintenance, oil changes, "
        "battery replacement, tire services, and diagnostics. We come to you with all necessary tools.",
        [
            ("mech_oil", "Oil Change", "Engine oil and filter change"),
            ("mech_battery", "Battery Service", "Battery replacement and testing"),
            ("mech_tire", "Tire Services", "Tire repair and replacement"),
            ("mech_diagnostic", "Car Diagnostics", "Computer diagnostics and check"),
        ],
    ),
    (
        "home_cleaning",
        "Home Cleaning",
        "Professional house cleaning and deep cleaning services",
        "Comprehensive home cleaning services including regular cleaning, deep cleaning, "
        "window cleaning, carpet cleaning, and post-renovation cleanup. Trained and insured cleaners.",
        [
            ("clean_regular", "Regular Cleaning", "Standard house cleaning"),
            ("clean_deep", "Deep Cleaning", "Thorough deep cleaning service"),
            ("clean_window", "Window Cleaning", "Professional window cleaning"),
            ("clean_carpet", "Carpet Cleaning", "Carpet and upholstery cleaning"),
        ],
    ),
    (
        "barber",
        "Barber to Home",
        "Mobile barber and hair styling services at home",
        "Professional barber services at your location. Haircuts, beard trimming, styling, "
        "shaving, and grooming services. Perfect for busy schedules or special occasions.",
        [
            ("barber_haircut", "Haircut", "Professional haircut service"),
            ("barber_beard", "Beard Trim", "Beard trimming and styling"),
            ("barber_shave", "Shaving", "Traditional wet shave"),
            ("barber_styling", "Hair Styling", "Hair styling and grooming"),
        ],
    ),
    (
        "elderly_care",
        "Elderly Care",
        "Compassionate caregiving and assistance for seniors",
        "Professional elderly care services including personal care assistance, medication "
        "reminders, meal preparation, companionship, light housekeeping, and mobility "
        "assistance. Certified caregivers.",
        [
            ("care_personal", "Personal Care", "Assistance with daily activities"),
            ("care_medical", "Medical Assistance", "Medication reminders and health monitoring"),
            ("care_companion", "Companionship", "Social interaction and companionship"),
            ("care_meal", "Meal Preparation", "Meal planning and cooking"),
        ],
    ),
    (
        "bill_payments",
        "Online Bill Payments",
        "Pay utility bills, subscriptions, and services online",
        "Convenient online bill payment service for electricity, water, gas, internet, phone, "
        "TV subscriptions, and other utilities. Secure payment processing with instant confirmation.",
        [
            ("bill_electricity", "Electricity Bill", "Pay electricity bills online"),
            ("bill_water", "Water Bill", "Pay water utility bills"),
            ("bill_gas", "Gas Bill", "Pay gas utility bills"),
            ("bill_internet", "Internet & Phone", "Pay internet and phone bills"),
        ],
    ),
    (
        "dry_cleaning",
        "Dry Cleaning",
        "Pickup and delivery dry cleaning service",
        "Professional dry cleaning and laundry services with pickup and delivery. We handle "
        "delicate fabrics, suits, formal wear, curtains, and specialty items. Free pickup and "
        "delivery included.",
        [
            ("dry_suits", "Suits & Formal Wear", "Dry clean suits and formal attire"),
            ("dry_delicate", "Delicate Fabrics", "Special care for delicate items"),
            ("dry_curtains", "Curtains & Drapes", "Dry clean curtains and drapes"),
            ("dry_laundry", "Laundry Service", "Wash and fold laundry service"),
        ],
    ),
]

CATEGORIES: tuple[Category, ...] = tuple(
    Category(
        id=category_id,
        name=name,
        description=description,
        details=details,
        subcategories=tuple(Subcategory(id=s_id, name=s_name, description=s_desc) for s_id, s_name, s_desc in subs),
    )
    for category_id, name, description, details, subs in SERVICE_TABLE
)


def get_category(category_id: str) -> Optional[Category]:
    """Get category by ID."""
    for category in CATEGORIES:
        if category.id == category_id:
            return category
    return None


def get_subcategory(category_id: str, subcategory_id: str) -> Optional[Subcategory]:
    """Get subcategory by category and subcategory ID."""
    category = get_category(category_id)
    if category is None:
        return None
    for sub in category.subcategories:
        if sub.id == subcategory_id:
            return sub
    return None


def service_label(category: Category, subcategory: Subcategory) -> str:
    """Return the display label stored as a booking's service name."""
    return f"{category.name} - {subcategory.name}"


def find_category_for_service(service_name: str) -> Optional[Category]:
    """Find the first category whose name occurs in ``service_name``.

    Substring matching is ambiguous when one category name contains
    another; the first match in catalog order wins.
    """
    for category in CATEGORIES:
        if category.name in service_name:
            return category
    return None
