import asyncio
import random
import uuid
from datetime import date, timedelta

from farmrec.core.database import AsyncSessionLocal
from farmrec.crud.farmers import create_farmer
from farmrec.services.validation_service import clean_farmer_data, validate_farmer_data

# ------------------------------------------------------------
# CONFIG
# ------------------------------------------------------------
NUM_FARMERS = 25
GROWING_DAYS = (90, 130)       # planted -> harvest
HARVEST_OFFSET = (-20, 45)     # harvest relative to today

FIRST_NAMES = ["Juan", "Maria", "Jose", "Ana", "Pedro", "Rosa", "Carlos", "Liza"]
LAST_NAMES = ["Cruz", "Santos", "Reyes", "Garcia", "Mendoza", "Bautista", "Aquino"]

# town -> barangays
LOCATIONS = {
    "San Jose": ["Poblacion", "Malabanan", "San Roque"],
    "Sta. Maria": ["Bagong Silang", "Caysio"],
    "Tanauan": ["Bilog-Bilog", "Darasa", "Sambat"],
}
LOCATION_GROUPS = ["North Cluster", "South Cluster", "Lowland"]


# ------------------------------------------------------------
# Build one farmer form
# ------------------------------------------------------------
def generate_form():
    town = random.choice(list(LOCATIONS))
    harvest = date.today() + timedelta(days=random.randint(*HARVEST_OFFSET))
    planted = harvest - timedelta(days=random.randint(*GROWING_DAYS))

    form = {
        "first_name": random.choice(FIRST_NAMES),
        "last_name": random.choice(LAST_NAMES),
        "middle_initial": random.choice(["", "A", "B", "D", "M"]),
        "location_group": random.choice(LOCATION_GROUPS),
        "barangay": random.choice(LOCATIONS[town]),
        "town": town,
        "contact_number": f"+63 9{random.randint(10, 99)} {random.randint(100, 999)} {random.randint(1000, 9999)}",
        "land_area": str(round(random.uniform(0.5, 5.0), 2)),
        "planted_date": planted.isoformat(),
        "harvest_date": harvest.isoformat(),
    }

    # roughly one in six has no schedule yet
    if random.random() < 0.15:
        form["planted_date"] = ""
        form["harvest_date"] = ""

    return form


# ------------------------------------------------------------
# Main generator
# ------------------------------------------------------------
async def generate_mock_data(user_id: str):
    async with AsyncSessionLocal() as db:
        for _ in range(NUM_FARMERS):
            form = generate_form()
            result = validate_farmer_data(form)
            if not result.is_valid:
                print(f"Skipped invalid form: {result.errors}")
                continue

            farmer = await create_farmer(db, clean_farmer_data(form), user_id=user_id)
            print(f"Created farmer {farmer.id} ({farmer.first_name} {farmer.last_name})")


# ------------------------------------------------------------
# Script Entrypoint
# ------------------------------------------------------------
if __name__ == "__main__":
    print("\n=== MOCK FARMER DATA GENERATOR ===")

    user_id = input("Enter encoder User ID (UUID): ").strip()
    try:
        uuid.UUID(user_id)
    except ValueError:
        print("Invalid UUID")
        raise SystemExit(1)

    asyncio.run(generate_mock_data(user_id))
    print("\nDone! Mock farmers inserted successfully.\n")
