"""Fixed offline catalog for the synthetic provider.

Enable with ``USE_MOCK_DATA=true`` or ``API_PROVIDER=mock``.
"""

from moviestream.schemas import CastMember, Genre, MediaDetails, MediaItem, StreamingProvider

MOCK_IMAGE = "/mock-placeholder"
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/500x750?text=Mock+Image"
MOCK_TRAILER_KEY = "dQw4w9WgXcQ"


def _item(
    item_id: int,
    title: str,
    overview: str,
    release_date: str,
    vote_average: float,
    vote_count: int,
    media_type: str,
    genre_ids: list[int],
) -> MediaItem:
    return MediaItem(
        id=item_id,
        title=title,
        original_title=title,
        poster_path=MOCK_IMAGE,
        backdrop_path=MOCK_IMAGE,
        overview=overview,
        release_date=release_date,
        vote_average=vote_average,
        vote_count=vote_count,
        media_type=media_type,
        genre_ids=genre_ids,
    )


MOCK_MOVIES: list[MediaItem] = [
    _item(
        1,
        "The Adventure Begins",
        "An epic journey through uncharted territories where heroes are made "
        "and legends are born.",
        "2024-06-15",
        8.5,
        12500,
        "movie",
        [28, 12, 878],
    ),
    _item(
        2,
        "Mystery of the Deep",
        "A team of scientists discovers something extraordinary beneath the ocean floor.",
        "2024-05-20",
        7.8,
        8900,
        "movie",
        [878, 53],
    ),
    _item(
        3,
        "Love in Paris",
        "Two strangers meet in the city of lights and discover that fate has other plans.",
        "2024-02-14",
        7.2,
        6500,
        "movie",
        [10749, 35],
    ),
    _item(
        4,
        "The Last Stand",
        "When all hope seems lost, one hero rises to defend humanity against "
        "impossible odds.",
        "2024-07-04",
        8.1,
        15000,
        "movie",
        [28, 878, 53],
    ),
    _item(
        5,
        "Shadows in the Night",
        "A detective uncovers a conspiracy that threatens to destroy everything "
        "she holds dear.",
        "2024-03-22",
        7.6,
        7200,
        "movie",
        [80, 53, 18],
    ),
]

MOCK_TV_SHOWS: list[MediaItem] = [
    _item(
        101,
        "Kingdom of Dreams",
        "A fantasy epic following the rise and fall of kingdoms in a world "
        "where magic is real.",
        "2023-09-01",
        8.9,
        25000,
        "tv",
        [14, 18, 28],
    ),
    _item(
        102,
        "Tech Titans",
        "The cutthroat world of Silicon Valley startups and the people who build them.",
        "2024-01-15",
        8.2,
        18000,
        "tv",
        [18, 35],
    ),
    _item(
        103,
        "Space Explorers",
        "A crew of astronauts embarks on humanity's first interstellar mission.",
        "2024-04-10",
        8.7,
        22000,
        "tv",
        [878, 12, 18],
    ),
]

# Trending "all": first three movies, then first two shows
MOCK_TRENDING_ALL: list[MediaItem] = MOCK_MOVIES[:3] + MOCK_TV_SHOWS[:2]

_US = {"iso_3166_1": "US", "name": "United States of America"}
_ENGLISH = {"iso_639_1": "en", "name": "English", "english_name": "English"}

MOCK_DETAILS: dict[tuple[str, int], MediaDetails] = {
    ("movie", 1): MediaDetails(
        **MOCK_MOVIES[0].model_dump(exclude={"overview"}),
        overview=(
            "An epic journey through uncharted territories where heroes are made "
            "and legends are born. Follow a group of unlikely companions as they "
            "traverse dangerous lands, face mythical creatures, and discover the "
            "true meaning of courage."
        ),
        runtime=142,
        genres=[
            Genre(id=28, name="Action"),
            Genre(id=12, name="Adventure"),
            Genre(id=878, name="Science Fiction"),
        ],
        tagline="Every legend has a beginning",
        status="Released",
        production_countries=[_US],
        spoken_languages=[_ENGLISH],
        budget=180_000_000,
        revenue=650_000_000,
    ),
    ("tv", 101): MediaDetails(
        **MOCK_TV_SHOWS[0].model_dump(exclude={"overview"}),
        overview=(
            "A fantasy epic following the rise and fall of kingdoms in a world "
            "where magic is real. Political intrigue, epic battles, and complex "
            "characters make this a must-watch series."
        ),
        runtime=55,
        genres=[
            Genre(id=14, name="Fantasy"),
            Genre(id=18, name="Drama"),
            Genre(id=28, name="Action"),
        ],
        tagline="Power comes at a price",
        status="Returning Series",
        production_countries=[_US],
        spoken_languages=[_ENGLISH],
        number_of_seasons=3,
        number_of_episodes=24,
    ),
}

MOCK_CAST: list[CastMember] = [
    CastMember(id=1001, name="John Smith", character="Hero", profile_path=MOCK_IMAGE, order=0),
    CastMember(id=1002, name="Jane Doe", character="Heroine", profile_path=MOCK_IMAGE, order=1),
    CastMember(id=1003, name="Bob Johnson", character="Villain", profile_path=MOCK_IMAGE, order=2),
    CastMember(
        id=1004, name="Alice Williams", character="Mentor", profile_path=MOCK_IMAGE, order=3
    ),
    CastMember(
        id=1005, name="Charlie Brown", character="Sidekick", profile_path=MOCK_IMAGE, order=4
    ),
]

MOCK_PROVIDERS: list[StreamingProvider] = [
    StreamingProvider(
        provider_id=8, provider_name="Netflix", logo_path=MOCK_IMAGE, link="#", type="flatrate"
    ),
    StreamingProvider(
        provider_id=9,
        provider_name="Amazon Prime",
        logo_path=MOCK_IMAGE,
        link="#",
        type="flatrate",
    ),
    StreamingProvider(
        provider_id=337, provider_name="Disney+", logo_path=MOCK_IMAGE, link="#", type="flatrate"
    ),
]


def generic_details(item: MediaItem) -> MediaDetails:
    """Detail record for catalog titles without a hand-written entry."""
    if item.media_type == "tv":
        return MediaDetails(
            **item.model_dump(),
            runtime=45,
            genres=[Genre(id=18, name="Drama")],
            tagline="A mock TV show",
            status="Returning Series",
            production_countries=[{"iso_3166_1": "US", "name": "United States"}],
            spoken_languages=[_ENGLISH],
            number_of_seasons=2,
            number_of_episodes=16,
        )
    return MediaDetails(
        **item.model_dump(),
        runtime=120,
        genres=[Genre(id=28, name="Action")],
        tagline="A mock movie",
        status="Released",
        production_countries=[{"iso_3166_1": "US", "name": "United States"}],
        spoken_languages=[_ENGLISH],
    )
