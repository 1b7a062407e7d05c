import pytest

from wordle_solver import Dictionary, LetterStatus

H = LetterStatus.HIT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT


TANGY_WORDS = ["TONEY", "TANKY", "TANGY", "TANGO", "MANGY", "CRANE", "SLATE"]

# (guess, feedback) pairs for a game whose answer is TANGY
TANGY_GAME = [
    ("RUSTY", [A, A, A, P, H]),
    ("TONEY", [H, A, H, A, H]),
    ("TANKY", [H, H, H, A, H]),
    ("TANGY", [H, H, H, H, H]),
]

KNOLL_WORDS = ["SOARE", "CLOUD", "YMOLT", "OVOLI", "TROLL", "DROLL", "ATOLL", "WHOLE", "KNOLL"]

# The answer is KNOLL; OVOLI's leading O is reported absent because the only
# other O is already a hit.
KNOLL_GAME = [
    ("SOARE", "-.---"),
    ("CLOUD", "-.X--"),
    ("YMOLT", "--XX-"),
    ("OVOLI", "--XX-"),
]


@pytest.fixture
def tangy_dictionary():
    return Dictionary(TANGY_WORDS)


@pytest.fixture
def knoll_dictionary():
    return Dictionary(KNOLL_WORDS)


@pytest.fixture
def words_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(w.lower() for w in TANGY_WORDS) + "\n")
    return str(path)
