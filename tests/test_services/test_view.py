"""Tests for collection filtering and sorting."""

import pytest

from movie_shelf.schemas.movie import CollectionMovie, MovieStatus
from movie_shelf.schemas.view import CollectionViewParams, SortDirection
from movie_shelf.services.view import apply_view, sort_key_for


def make_movie(movie_id: str, title: str, **overrides) -> CollectionMovie:
    """Create a collection movie with sensible defaults."""
    data = {"id": movie_id, "title": title, "status": "watched"}
    data.update(overrides)
    return CollectionMovie.model_validate(data)


@pytest.fixture
def collection() -> list[CollectionMovie]:
    """A small mixed collection."""
    return [
        make_movie("1", "The Matrix", release_year=1999, rating=5, genres=["Action", "Sci-Fi"]),
        make_movie("2", "Amélie", release_year=2001, rating=4, genres=["Comedy", "Romance"]),
        make_movie("3", "Alien", release_year=1979, rating=None, genres=["Horror", "Sci-Fi"]),
        make_movie("4", "Arrival", release_year=None, rating=4, genres=[{"name": "Drama"}]),
        make_movie("5", "Matrix Reloaded", release_year=2003, status="owned", genres=["Action"]),
        make_movie("6", "Paddington", release_year=2014, status="wishlist", genres=[]),
    ]


def titles(movies: list[CollectionMovie]) -> list[str]:
    """Return the titles of movies in order."""
    return [movie.title for movie in movies]


class TestFilters:
    """Tests for title, genre and status filters."""

    def test_no_params_keeps_everything_in_order(self, collection) -> None:
        """Test that the default view is the input order."""
        assert titles(apply_view(collection)) == titles(collection)

    def test_query_is_case_insensitive_substring(self, collection) -> None:
        """Test title substring matching."""
        params = CollectionViewParams(query="  MATRIX ")
        assert titles(apply_view(collection, params)) == ["The Matrix", "Matrix Reloaded"]

    def test_blank_query_matches_everything(self, collection) -> None:
        """Test that a whitespace query does not filter."""
        assert len(apply_view(collection, CollectionViewParams(query="   "))) == len(collection)

    def test_query_without_matches(self, collection) -> None:
        """Test that an unmatched query gives an empty view."""
        assert apply_view(collection, CollectionViewParams(query="zzz")) == []

    def test_genres_match_any_selected(self, collection) -> None:
        """Test that a movie with any selected genre is shown."""
        params = CollectionViewParams(genres={"horror", "ROMANCE"})
        assert titles(apply_view(collection, params)) == ["Amélie", "Alien"]

    def test_genre_objects_are_matched_by_name(self, collection) -> None:
        """Test that {name} genre entries are filtered like labels."""
        params = CollectionViewParams(genres={"Drama"})
        assert titles(apply_view(collection, params)) == ["Arrival"]

    def test_statuses_filter(self, collection) -> None:
        """Test filtering by a set of statuses."""
        params = CollectionViewParams(statuses={MovieStatus.OWNED, MovieStatus.WISHLIST})
        assert titles(apply_view(collection, params)) == ["Matrix Reloaded", "Paddington"]

    def test_filters_are_combined(self, collection) -> None:
        """Test that all filters must match together."""
        params = CollectionViewParams(
            query="matrix", genres={"action"}, statuses={MovieStatus.WATCHED}
        )
        assert titles(apply_view(collection, params)) == ["The Matrix"]

    def test_result_is_subset_of_input(self, collection) -> None:
        """Test that filtering never invents or duplicates movies."""
        params = CollectionViewParams(genres={"sci-fi"}, rating_sort=SortDirection.DESC)
        result = apply_view(collection, params)

        assert len({movie.id for movie in result}) == len(result)
        assert all(movie in collection for movie in result)

    def test_input_is_not_modified(self, collection) -> None:
        """Test that the input list keeps its order."""
        before = list(collection)
        apply_view(collection, CollectionViewParams(year_sort=SortDirection.ASC))
        assert collection == before


class TestSorting:
    """Tests for rating and year sorts."""

    def test_rating_descending_puts_unrated_last(self, collection) -> None:
        """Test descending ratings with title tie-breaks."""
        params = CollectionViewParams(rating_sort=SortDirection.DESC)
        assert titles(apply_view(collection, params)) == [
            "The Matrix",
            "Amélie",
            "Arrival",
            "Alien",
            "Matrix Reloaded",
            "Paddington",
        ]

    def test_rating_ascending_puts_unrated_first(self, collection) -> None:
        """Test ascending ratings with unrated movies treated as lowest."""
        params = CollectionViewParams(rating_sort=SortDirection.ASC)
        assert titles(apply_view(collection, params)) == [
            "Alien",
            "Matrix Reloaded",
            "Paddington",
            "Amélie",
            "Arrival",
            "The Matrix",
        ]

    def test_year_ascending_puts_missing_years_last(self, collection) -> None:
        """Test ascending release year sort."""
        params = CollectionViewParams(year_sort=SortDirection.ASC)
        assert titles(apply_view(collection, params)) == [
            "Alien",
            "The Matrix",
            "Amélie",
            "Matrix Reloaded",
            "Paddington",
            "Arrival",
        ]

    def test_year_descending_puts_missing_years_last(self, collection) -> None:
        """Test descending release year sort."""
        params = CollectionViewParams(year_sort=SortDirection.DESC)
        assert titles(apply_view(collection, params)) == [
            "Paddington",
            "Matrix Reloaded",
            "Amélie",
            "The Matrix",
            "Alien",
            "Arrival",
        ]

    def test_rating_sort_takes_precedence(self, collection) -> None:
        """Test that the year sort is ignored while a rating sort is active."""
        both = CollectionViewParams(rating_sort=SortDirection.DESC, year_sort=SortDirection.ASC)
        rating_only = CollectionViewParams(rating_sort=SortDirection.DESC)

        assert titles(apply_view(collection, both)) == titles(apply_view(collection, rating_only))

    def test_equal_keys_break_ties_by_title(self) -> None:
        """Test that equal ratings are ordered by title."""
        movies = [make_movie("1", "Zodiac", rating=3), make_movie("2", "Brick", rating=3)]
        params = CollectionViewParams(rating_sort=SortDirection.ASC)

        assert titles(apply_view(movies, params)) == ["Brick", "Zodiac"]

    def test_stale_rating_sorts_as_unrated(self) -> None:
        """Test that a rating left on a non-watched movie does not affect its rank."""
        movies = [
            make_movie("1", "A", status="wishlist", rating=5),
            make_movie("2", "B", rating=3),
        ]
        params = CollectionViewParams(rating_sort=SortDirection.DESC)

        assert titles(apply_view(movies, params)) == ["B", "A"]

    def test_sorting_is_deterministic(self, collection) -> None:
        """Test that input order does not affect a sorted view."""
        params = CollectionViewParams(year_sort=SortDirection.DESC)
        assert apply_view(collection, params) == apply_view(list(reversed(collection)), params)

    def test_invalid_direction_is_rejected(self) -> None:
        """Test that an unknown sort direction raises ValueError."""
        params = CollectionViewParams.model_construct(
            query="",
            genres=frozenset(),
            statuses=frozenset(),
            rating_sort="sideways",
            year_sort=SortDirection.NONE,
        )
        with pytest.raises(ValueError, match="Invalid rating_sort"):
            sort_key_for(params)

    def test_no_sort_key_without_active_sort(self) -> None:
        """Test that no key is chosen when both sorts are off."""
        assert sort_key_for(CollectionViewParams()) is None


class TestBrowsingScenarios:
    """End-to-end filter and sort scenarios."""

    def test_all_filters_must_match(self) -> None:
        """Test that a title and genre match is not enough without the status."""
        movies = [
            make_movie("1", "Dune", genres=["Sci-Fi"], status="owned"),
            make_movie("2", "Dune Part Two", genres=["Sci-Fi", "Drama"], status="wishlist"),
            make_movie("3", "Clue", genres=["Comedy"], status="owned"),
        ]
        params = CollectionViewParams(
            query="dune", genres={"sci-fi"}, statuses={MovieStatus.OWNED}
        )

        assert titles(apply_view(movies, params)) == ["Dune"]

    def test_unrated_ties_break_alphabetically(self) -> None:
        """Test descending rating with two unrated movies."""
        movies = [
            make_movie("1", "B", rating=None),
            make_movie("2", "A", rating=None),
            make_movie("3", "C", rating=3),
        ]
        params = CollectionViewParams(rating_sort=SortDirection.DESC)

        assert titles(apply_view(movies, params)) == ["C", "A", "B"]

    @pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
    def test_missing_year_last_in_both_directions(self, direction: SortDirection) -> None:
        """Test that a movie without a release year always sorts last."""
        movies = [
            make_movie("1", "X", release_year=2000),
            make_movie("2", "Y", release_year=None),
        ]

        assert titles(apply_view(movies, CollectionViewParams(year_sort=direction))) == ["X", "Y"]

    def test_applying_twice_changes_nothing(self, collection) -> None:
        """Test that a view of a view with the same params is the same view."""
        params = CollectionViewParams(genres={"action", "sci-fi"}, rating_sort=SortDirection.ASC)
        once = apply_view(collection, params)

        assert apply_view(once, params) == once
