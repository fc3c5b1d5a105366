from typing import Optional, Union

from pydantic import ConfigDict, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

# JSON bodies use camelCase (releaseYear); snake_case is accepted on input too.
MOVIE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MovieBase(SQLModel):
    model_config = MOVIE_CONFIG

    title: str
    description: str
    genre: str
    release_year: int
    rating: float


class Movie(MovieBase):
    id: int


class MovieCreate(SQLModel):
    """Request body for creating or replacing a movie.

    Text fields and the release year are optional here so that missing or
    blank values reach validate_movie and get its message instead of a
    schema error. A missing rating counts as 0.0; booleans are not numbers.
    Unknown keys, including ``id``, are dropped.
    """
    model_config = MOVIE_CONFIG

    title: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None
    rating: Union[StrictInt, StrictFloat] = 0.0
