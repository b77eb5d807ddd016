"""
Compose Instagram post text for a film photo.
"""

from enum import Enum
from typing import List


class FilmType(Enum):
    COLOR = "color"
    BLACK_AND_WHITE = "black-and-white"
    LOMOGRAPHY_COLOR = "lomography-color"
    LOMOGRAPHY_BLACK_AND_WHITE = "lomography-black-and-white"

    @property
    def is_lomography(self) -> bool:
        return self in (FilmType.LOMOGRAPHY_COLOR, FilmType.LOMOGRAPHY_BLACK_AND_WHITE)

    @property
    def is_black_and_white(self) -> bool:
        return self in (FilmType.BLACK_AND_WHITE, FilmType.LOMOGRAPHY_BLACK_AND_WHITE)


COLOR_HASHTAGS = (
    "#35mm #colorFilm #filmPhotography #analogPhotography #filmIsNotDead "
    "#iStillShootFilm #shootFilm #filmCommunity #filmLovers #colorFilmPhotography "
    "#35mmFilm #filmShooter #analogLove #filmLife #analogVibes #analogLove"
)

BLACK_AND_WHITE_HASHTAGS = (
    "#35mm #blackAndWhitePhotography #BWPhotography #analogPhotography "
    "#filmPhotography #classicBW #filmIsNotDead #shootFilm #iStillShootFilm "
    "#filmCommunity #BWFilm #BWFilmPhotography #filmLovers #monochromePhotography "
    "#35mmFilm #filmShooter #BlackAndWhiteFilm #analogLove #filmLife"
)

DEFAULT_LAB = "@nanni_lab"
DEFAULT_TITLE = "."


def accumulate_words(text: str) -> List[str]:
    """
    Turn a name into growing hashtag stems.

    Words in parentheses are skipped and a leading '@' is dropped, so
    "Kodak Portra 400" gives ["Kodak", "KodakPortra", "KodakPortra400"].
    """
    result = []
    current = ""
    for word in text.split(" "):
        if word.startswith("("):
            continue
        current += word[1:] if word.startswith("@") else word
        result.append(current)
    return result


def build_hashtags(film: str, film_type: FilmType, camera: str) -> str:
    hashtags = BLACK_AND_WHITE_HASHTAGS if film_type.is_black_and_white else COLOR_HASHTAGS
    if film_type.is_lomography:
        hashtags += " #HeyLomography"
    for stem in accumulate_words(film) + accumulate_words(camera):
        hashtags += f" #{stem}"
    return hashtags


def build_instagram_caption(camera: str, film: str, film_type: FilmType = FilmType.COLOR,
                            lab: str = DEFAULT_LAB, title: str = DEFAULT_TITLE) -> str:
    """
    Build the post text: title, gear lines and hashtags.

    Args:
        camera: Camera used
        film: Film stock
        film_type: Kind of film, selects the hashtag set
        lab: Lab that developed the film
        title: First line of the post

    Returns:
        Post text
    """
    return (
        f"{title}\n\n"
        f"📸 {camera}\n"
        f"🎞️ {film}\n"
        f"🧪 {lab}\n\n"
        f"{build_hashtags(film, film_type, camera)}"
    )
