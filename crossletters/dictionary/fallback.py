"""Built-in words used when the dictionary cannot supply what the engine needs."""

from typing import Dict, List

# Target word candidates per length, tried in shuffled order
FALLBACK_TARGETS: Dict[int, List[str]] = {
    3: ["THE", "AND", "ARE", "CAN", "ONE", "OUR", "HAS", "EAT", "TEA", "SEA"],
    4: ["TIME", "NEAR", "READ", "GATE", "LATE", "SOME", "RATE", "MORE", "STAR", "TEAM"],
    5: ["GREAT", "HEART", "STONE", "LEARN", "PAINT", "TRAIN", "HORSE", "PLATE", "SHORE", "TEARS"],
    6: ["GARDEN", "MASTER", "SILENT", "STREAM", "PLANET", "MOTHER", "CASTLE", "DANGER", "FOREST", "STRING"],
    7: ["PAINTER", "CAPTAIN", "RESTING", "TEACHER", "STAINED", "ORANGES", "HEARING", "TRAINED", "READING", "PARTIES"],
    8: ["TOGETHER", "TRAINERS", "PAINTERS", "STRANGER", "CREATION", "HANDSOME", "MONSTERS", "DESPAIRS"],
    9: ["EDUCATION", "IMPORTANT", "DIFFERENT", "KNOWLEDGE", "BEAUTIFUL", "WONDERFUL", "SOMETHING", "FOLLOWING"],
    10: ["UNDERSTAND", "GOVERNMENT", "EVERYTHING", "MANAGEMENT", "BACKGROUND", "GENERATION", "POPULATION", "TELEVISION"],
}

# Last resort per length when no fallback target is accepted by the dictionary
DEFAULT_TARGETS: Dict[int, str] = {
    3: "THE",
    4: "WORD",
    5: "GREAT",
    6: "SIMPLE",
    7: "PROBLEM",
    8: "COMPLETE",
    9: "DIFFERENT",
    10: "UNDERSTAND",
}

DEFAULT_TARGET = "PUZZLE"

# Very common short words used to pad a thin candidate set
COMMON_WORDS: List[str] = [
    "THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL", "CAN", "HER",
    "WAS", "ONE", "HAD", "HAS", "GET", "USE", "MAN", "NEW", "NOW", "OLD",
    "SEE", "HIM", "TWO", "HOW", "ITS", "WHO", "OIL", "SIT", "SET", "RUN",
    "EAT", "FAR", "SEA", "EYE", "RED", "TOP", "ARM", "TOO", "END", "WHY",
    "LET", "TRY",
]
