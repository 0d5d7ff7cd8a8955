"""OMDb API data types.

OMDb returns every field as a string, using "N/A" for missing values.
"""

from typing import NotRequired, TypedDict

# PascalCase keys mirror the OMDb wire format.
OMDbSearchItemData = TypedDict(
    "OMDbSearchItemData",
    {
        "Title": str,
        "Year": str,
        "imdbID": str,
        "Type": str,
        "Poster": str,
    },
)

OMDbSearchData = TypedDict(
    "OMDbSearchData",
    {
        "Search": NotRequired[list[OMDbSearchItemData]],
        "totalResults": NotRequired[str],
        "Response": str,
        "Error": NotRequired[str],
    },
)

OMDbDetailsData = TypedDict(
    "OMDbDetailsData",
    {
        "Title": str,
        "Year": str,
        "Rated": NotRequired[str],
        "Released": NotRequired[str],
        "Runtime": NotRequired[str],
        "Genre": NotRequired[str],
        "Director": NotRequired[str],
        "Writer": NotRequired[str],
        "Actors": NotRequired[str],
        "Plot": NotRequired[str],
        "Language": NotRequired[str],
        "Country": NotRequired[str],
        "Awards": NotRequired[str],
        "Poster": NotRequired[str],
        "Metascore": NotRequired[str],
        "imdbRating": NotRequired[str],
        "imdbVotes": NotRequired[str],
        "imdbID": str,
        "Type": str,
        "totalSeasons": NotRequired[str],
        "BoxOffice": NotRequired[str],
        "Response": str,
        "Error": NotRequired[str],
    },
)


class OMDbErrorData(TypedDict):
    """Error body returned with HTTP 200."""

    Response: str
    Error: str
