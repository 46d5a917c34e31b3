from __future__ import annotations
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from scavenger.models.location import Location

DEFAULT_LOCATIONS: list[dict] = [
    {
        "name": "Prime Pizza",
        "clues": [
            "It is a restaurant where they sell food that everyone likes.",
            "It is a place where they sell a type of Italian food.",
            "They create this food in a New York way.",
        ],
        "answer": "Prime Pizza",
    },
    {
        "name": "Prince Street Pizza",
        "clues": [
            "It's a place famous for its Sicilian-style pizza.",
            "Its name includes a well-known New York street.",
            "It started in NYC and is known for its thick, square slices.",
        ],
        "answer": "Prince Street Pizza",
    },
    {
        "name": "Hamilton Park",
        "clues": [
            "A place that receives the name of a Founding Father of the US",
            "Is a place where you can go with family and friends to have a good time",
            "It's a big green space with lots of grass and trees.",
        ],
        "answer": "Hamilton Park",
    },
    {
        "name": "McDonald Park",
        "clues": [
            "This place is called like a big chain of fast food restaurants",
            "It has a soccer field",
            "It's a place to play and enjoy outdoor activities",
        ],
        "answer": "McDonald Park",
    },
    {
        "name": "Rose Bowl",
        "clues": [
            "It is the place where different athletic events take place",
            "It has the name of a flower",
            "It is the home of the LAFC, UCLA and other teams",
        ],
        "answer": "Rose Bowl",
    },
    {
        "name": "Huntington Museum",
        "clues": [
            "It's a museum named after an important family.",
            "It's a place where you can see art, gardens, and a library.",
            "It has a large collection of rare books, European art, and exotic plants.",
        ],
        "answer": "Huntington Museum",
    },
    {
        "name": "Bloomfield Creamery",
        "clues": [
            "It's a place where you can get something cold and sweet.",
            "Its name includes a flower showing all of its petals and a field.",
            "They serve ice cream in many different flavors.",
        ],
        "answer": "Bloomfield Creamery",
    },
    {
        "name": "Starbucks",
        "clues": [
            "It's a place where many people go for coffee or tea.",
            "Its logo is a green mermaid.",
            "You can order drinks, snacks, and even work or study there.",
        ],
        "answer": "Starbucks",
    },
]

async def list_locations(session: AsyncSession) -> list[Location]:
    return list((await session.execute(select(Location).order_by(Location.id.asc()))).scalars().all())

async def seed_default_locations(session: AsyncSession, locations: list[dict] | None = None) -> int:
    """Insert the default hunt if no locations exist yet. Returns the number of rows added."""
    rows = locations if locations is not None else DEFAULT_LOCATIONS
    for data in rows:
        # clue index 0 is shown as soon as a location comes up
        if not data.get("clues"):
            raise ValueError(f"Location {data.get('name')!r} needs at least one clue")
    count = await session.scalar(select(func.count()).select_from(Location))
    if count:
        return 0
    for data in rows:
        session.add(Location(name=data["name"], clues=list(data["clues"]), answer=data["answer"]))
    await session.commit()
    return len(rows)
