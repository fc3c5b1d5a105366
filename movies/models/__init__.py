from .movies import Movie, MovieCreate

__all__ = ["Movie", "MovieCreate"]
