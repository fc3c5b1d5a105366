from dataclasses import dataclass
from typing import Iterable, List, Union
import threading
import logging
import os

from movies.models.movies import Movie, MovieBase, MovieCreate

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

SEED_ENABLED = os.getenv("MOVIES_SEED", "true").lower() not in ("0", "false", "no")

SEED_MOVIES = [
    MovieBase(
        title="The Shawshank Redemption",
        description="Two imprisoned men bond over a number of years",
        genre="Drama",
        release_year=1994,
        rating=9.3,
    ),
    MovieBase(
        title="The Dark Knight",
        description="When the menace known as the Joker wreaks havoc",
        genre="Action",
        release_year=2008,
        rating=9.0,
    ),
    MovieBase(
        title="Inception",
        description="A thief who steals corporate secrets through dream-sharing",
        genre="Sci-Fi",
        release_year=2010,
        rating=8.8,
    ),
]

MUTABLE_FIELDS = ("title", "description", "genre", "release_year", "rating")


@dataclass(frozen=True)
class Found:
    movie: Movie


@dataclass(frozen=True)
class NotFound:
    movie_id: int


Lookup = Union[Found, NotFound]
MovieData = Union[MovieBase, MovieCreate]


class MovieStore:
    """In-memory movie collection and id sequence.

    A single lock covers both the list and the counter. Records leave the
    store as copies, so nothing outside can mutate stored state.
    """

    def __init__(self):
        self._movies: List[Movie] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def create(self, candidate: MovieData) -> Movie:
        with self._lock:
            movie = Movie(id=self._next_id, **_fields(candidate))
            self._next_id += 1
            self._movies.append(movie)
            return movie.model_copy()

    def get_by_id(self, movie_id: int) -> Lookup:
        with self._lock:
            movie = self._find(movie_id)
            if movie is None:
                return NotFound(movie_id)
            return Found(movie.model_copy())

    def list_all(self) -> List[Movie]:
        with self._lock:
            return [movie.model_copy() for movie in self._movies]

    def update(self, movie_id: int, data: MovieData) -> Lookup:
        with self._lock:
            movie = self._find(movie_id)
            if movie is None:
                return NotFound(movie_id)
            for field, value in _fields(data).items():
                setattr(movie, field, value)
            return Found(movie.model_copy())

    def delete(self, movie_id: int) -> bool:
        with self._lock:
            movie = self._find(movie_id)
            if movie is None:
                return False
            self._movies.remove(movie)
            return True

    def seed(self, movies: Iterable[MovieBase] = SEED_MOVIES) -> None:
        for movie in movies:
            self.create(movie)
        logger.info(f"Seeded movie store, {len(self)} entries present")

    def _find(self, movie_id: int):
        # caller holds the lock
        return next((m for m in self._movies if m.id == movie_id), None)


def _fields(data: MovieData) -> dict:
    return {field: getattr(data, field) for field in MUTABLE_FIELDS}


def create_store(seed: bool = SEED_ENABLED) -> MovieStore:
    store = MovieStore()
    if seed:
        store.seed()
    return store
