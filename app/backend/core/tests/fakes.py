def fake_movie(movie_id):
    return {"id": movie_id, "title": f"Movie {movie_id}", "imdb_id": f"tt{movie_id:07d}"}


def failing_for(*bad_ids, error=Exception):
    """A get_movie stand-in that raises for the given ids."""

    def get_movie(movie_id):
        if movie_id in bad_ids:
            raise error(f"movie {movie_id} unavailable")
        return fake_movie(movie_id)

    return get_movie
