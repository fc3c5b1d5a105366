"""Validation and delegation between the HTTP routes and the movie store."""
from typing import List, Optional
import logging

from fastapi import Request

from movies.database.db import Lookup, MovieStore
from movies.models.movies import Movie, MovieCreate

logger = logging.getLogger(__name__)

MIN_RELEASE_YEAR = 1800
MAX_RELEASE_YEAR = 2030
MIN_RATING = 0.0
MAX_RATING = 10.0


class ValidationError(Exception):
    """Movie data that breaks one of the field rules."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_movie(movie: MovieCreate) -> Optional[ValidationError]:
    """Check a movie against the field rules.

    Rules run in order title, description, genre, release year, rating and
    the first one broken is returned. Returns None when the movie is valid.
    """
    if _is_blank(movie.title):
        return ValidationError("title", "Title is required and cannot be empty")
    if _is_blank(movie.description):
        return ValidationError("description", "Description is required and cannot be empty")
    if _is_blank(movie.genre):
        return ValidationError("genre", "Genre is required and cannot be empty")
    if movie.release_year is None or not MIN_RELEASE_YEAR <= movie.release_year <= MAX_RELEASE_YEAR:
        return ValidationError(
            "releaseYear",
            f"Release year must be between {MIN_RELEASE_YEAR} and {MAX_RELEASE_YEAR}",
        )
    if not MIN_RATING <= movie.rating <= MAX_RATING:
        return ValidationError(
            "rating",
            f"Rating must be between {MIN_RATING} and {MAX_RATING}",
        )
    return None


class MovieService:
    def __init__(self, store: MovieStore):
        self.store = store

    def add_movie(self, movie: MovieCreate) -> Movie:
        error = validate_movie(movie)
        if error is not None:
            logger.warning(f"Rejected new movie: {error.message}")
            raise error
        created = self.store.create(movie)
        logger.info(f"A new movie has been added: ID {created.id}, {created.title}")
        return created

    def get_movie(self, movie_id: int) -> Lookup:
        return self.store.get_by_id(movie_id)

    def list_movies(self) -> List[Movie]:
        return self.store.list_all()

    def update_movie(self, movie_id: int, movie: MovieCreate) -> Lookup:
        error = validate_movie(movie)
        if error is not None:
            logger.warning(f"Rejected update of movie ID {movie_id}: {error.message}")
            raise error
        return self.store.update(movie_id, movie)

    def delete_movie(self, movie_id: int) -> bool:
        return self.store.delete(movie_id)


def get_service(request: Request) -> MovieService:
    return request.app.state.service
