"""
합성 Business 생성기

어휘 목록을 무작위 조합해 이름 / 설명 / 주소를 만들고
사업장 유형은 BUSINESS_TYPES 중 하나를 뽑는다.
ID · status · created_at은 지정하지 않는다 (저장소 기본값에 맡김).

사용:
    businesses = generate_businesses(10_000)
    businesses = generate_businesses(100, seed=42)   # 재현 가능
"""

from __future__ import annotations

import random

from .config import BUSINESS_TYPES
from .models import Business

# ============================================================
# 어휘
# ============================================================

NAME_PREFIXES = [
    "Blue", "Silver", "Golden", "Rapid", "Quiet", "Lucky", "Bright",
    "Happy", "Iron", "Crystal", "Urban", "Wild", "Sunny", "Royal",
    "Little", "Grand", "North", "Pixel", "Cosmic", "Maple", "Velvet",
]

NAME_NOUNS = [
    "Otter", "Falcon", "Lantern", "Harbor", "Willow", "Anchor", "Comet",
    "Badger", "Summit", "Orchard", "Beacon", "Kettle", "Fox", "Meadow",
    "Pebble", "Raven", "Spruce", "Tiger", "Garden", "Bridge",
]

NAME_SUFFIXES = [
    "Co.", "Labs", "Studio", "Works", "Market", "Kitchen", "Supply",
    "Group", "Bakery", "Cafe", "Trading", "Partners", "Logistics",
]

SENTENCE_SUBJECTS = [
    "Our team", "The shop", "This company", "Every branch", "The founder",
    "A small crew", "The kitchen", "Our staff",
]

SENTENCE_VERBS = [
    "delivers", "prepares", "designs", "repairs", "imports", "curates",
    "builds", "serves", "packs", "sells",
]

SENTENCE_OBJECTS = [
    "fresh bread every morning", "custom furniture", "local coffee beans",
    "hand-made ceramics", "bicycle parts", "seasonal flowers",
    "organic vegetables", "office supplies", "vintage clothing",
    "small batch sauces", "garden tools", "printed stationery",
]

SENTENCE_TAILS = [
    "for the neighborhood.", "across the city.", "since 1998.",
    "with a smile.", "on weekends only.", "at fair prices.",
    "to hotels and restaurants.", "for online customers.",
]

STREETS = [
    "Main St", "Oak Ave", "Pine Rd", "Maple Dr", "Cedar Ln", "Elm St",
    "Lake View Blvd", "Hill Rd", "Park Ave", "River Rd", "Sunset Blvd",
    "Market St", "Church St", "Mill Ln",
]

CITIES = [
    ("Springfield", "IL"), ("Riverside", "CA"), ("Franklin", "TN"),
    ("Greenville", "SC"), ("Bristol", "CT"), ("Clinton", "IA"),
    ("Madison", "WI"), ("Georgetown", "TX"), ("Salem", "OR"),
    ("Fairview", "NJ"), ("Ashland", "KY"), ("Dover", "DE"),
]


# ============================================================
# 생성
# ============================================================

def random_name(rng: random.Random) -> str:
    return f"{rng.choice(NAME_PREFIXES)} {rng.choice(NAME_NOUNS)} {rng.choice(NAME_SUFFIXES)}"


def random_paragraph(rng: random.Random, sentences: int | None = None) -> str:
    n = sentences or rng.randint(2, 4)
    return " ".join(
        f"{rng.choice(SENTENCE_SUBJECTS)} {rng.choice(SENTENCE_VERBS)} "
        f"{rng.choice(SENTENCE_OBJECTS)} {rng.choice(SENTENCE_TAILS)}"
        for _ in range(n)
    )


def random_address(rng: random.Random) -> str:
    city, state = rng.choice(CITIES)
    return (
        f"{rng.randint(1, 9999)} {rng.choice(STREETS)}, "
        f"{city}, {state}, {rng.randint(10000, 99999)}"
    )


def generate_businesses(count: int, seed: int | None = None) -> list[Business]:
    """count개의 합성 Business (아직 저장되지 않은 ORM 객체)."""
    rng = random.Random(seed)
    return [
        Business(
            name=random_name(rng),
            description=random_paragraph(rng),
            address=random_address(rng),
            business_type=rng.choice(BUSINESS_TYPES),
            staffs=[],
        )
        for _ in range(count)
    ]
