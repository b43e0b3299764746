"""
Movie catalog API endpoints.
"""

from typing import Awaitable, List

from fastapi import APIRouter, Depends, HTTPException, Query

from cinelog.api.dependencies import get_catalog
from cinelog.api.models.movie import MovieList
from cinelog.catalog import CandidateMovie, CatalogError, MovieDetails, TMDBCatalog

router = APIRouter(prefix="/api/movies", tags=["movies"])


async def _movie_list(lookup: Awaitable[List[CandidateMovie]]) -> MovieList:
    try:
        return MovieList(results=await lookup)
    except CatalogError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/search", response_model=MovieList)
async def search_movies(
    q: str = Query(..., min_length=1, max_length=200),
    catalog: TMDBCatalog = Depends(get_catalog),
):
    """Search movies by title, including other entries of matching franchises."""
    return await _movie_list(catalog.search_movies_with_franchise(q))


@router.get("/popular", response_model=MovieList)
async def popular(catalog: TMDBCatalog = Depends(get_catalog)):
    return await _movie_list(catalog.get_popular())


@router.get("/trending", response_model=MovieList)
async def trending(catalog: TMDBCatalog = Depends(get_catalog)):
    return await _movie_list(catalog.get_trending())


@router.get("/top-rated", response_model=MovieList)
async def top_rated(catalog: TMDBCatalog = Depends(get_catalog)):
    return await _movie_list(catalog.get_top_rated())


@router.get("/new-releases", response_model=MovieList)
async def new_releases(catalog: TMDBCatalog = Depends(get_catalog)):
    return await _movie_list(catalog.get_now_playing())


@router.get("/{movie_id}", response_model=MovieDetails)
async def get_movie(movie_id: int, catalog: TMDBCatalog = Depends(get_catalog)):
    """Get catalog details for one movie."""
    try:
        return await catalog.get_movie_details(movie_id)
    except CatalogError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail="Movie not found")
        raise HTTPException(status_code=503, detail=str(e))
