from contextlib import asynccontextmanager
from typing import List, Optional
import logging
import os

from fastapi import APIRouter, FastAPI, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movies.database.db import MovieStore, NotFound, create_store
from movies.models.movies import Movie, MovieCreate
from movies.service import MovieService, ValidationError, get_service

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

HOST = os.getenv("MOVIES_HOST", "0.0.0.0")
PORT = int(os.getenv("MOVIES_PORT", "8080"))

NOT_FOUND_RESPONSE = {404: {"description": "The movie was not found"}}

router = APIRouter(prefix="/api/movies")


def not_found(movie_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Movie with ID {movie_id} not found"
    )


@router.post("",
             response_model=Movie,
             status_code=status.HTTP_201_CREATED,
             summary="Add a new movie",
             response_description="The data of the created movie")
async def create_movie(movie: MovieCreate, service: MovieService = Depends(get_service)):
    return service.add_movie(movie)


@router.get("",
            response_model=List[Movie],
            summary="Get a list of all movies")
async def read_movies(service: MovieService = Depends(get_service)):
    movies = service.list_movies()
    logger.info(f"A list of movies was requested, {len(movies)} entries were found")
    return movies


@router.get("/{movie_id}",
            response_model=Movie,
            summary="Get a movie by ID",
            responses=NOT_FOUND_RESPONSE)
async def read_movie(movie_id: int, service: MovieService = Depends(get_service)):
    result = service.get_movie(movie_id)
    if isinstance(result, NotFound):
        logger.warning(f"A non-existent movie ID was requested {movie_id}")
        raise not_found(movie_id)
    return result.movie


@router.put("/{movie_id}",
            response_model=Movie,
            summary="Update movie data",
            responses=NOT_FOUND_RESPONSE)
async def update_movie(
        movie_id: int,
        movie_data: MovieCreate,
        service: MovieService = Depends(get_service)
):
    result = service.update_movie(movie_id, movie_data)
    if isinstance(result, NotFound):
        logger.warning(f"Attempt to update a non-existent movie ID {movie_id}")
        raise not_found(movie_id)
    logger.info(f"Updated movie ID {movie_id}: {result.movie.title}")
    return result.movie


@router.delete("/{movie_id}",
               status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete a movie",
               responses=NOT_FOUND_RESPONSE)
async def delete_movie(movie_id: int, service: MovieService = Depends(get_service)):
    if not service.delete_movie(movie_id):
        logger.warning(f"Attempt to delete a non-existent movie ID {movie_id}")
        raise not_found(movie_id)
    logger.info(f"Deleted movie ID {movie_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def health(service: MovieService = Depends(get_service)):
    return {"status": "ok", "movies": len(service.store)}


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": exc.message}
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        message = "Invalid request"
    elif errors[0].get("type") == "json_invalid":
        message = "Invalid JSON body"
    else:
        error = errors[0]
        location = ".".join(
            part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"
        )
        message = f"{location}: {error['msg']}" if location else error["msg"]
    logger.warning(f"Malformed request to {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Movie API is running!")
    logger.info(f"Access the API at: http://{HOST}:{PORT}/api/movies")
    logger.info(f"The service is ready to work, {len(app.state.service.store)} movies loaded")
    yield
    logger.info("Movie API stopped")


def create_app(store: Optional[MovieStore] = None, seed: Optional[bool] = None) -> FastAPI:
    """Build the application around an explicitly owned store.

    Without a store one is created, seeded unless ``seed`` is False
    (``MOVIES_SEED`` decides when ``seed`` is None).
    """
    if store is None:
        store = create_store() if seed is None else create_store(seed=seed)

    app = FastAPI(
        title="Movie API",
        description="API for managing a movie collection",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.service = MovieService(store)

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(router)
    app.add_api_route("/health", health, methods=["GET"], summary="Service health check")
    return app
