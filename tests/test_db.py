import threading

from movies.database.db import Found, NotFound, SEED_MOVIES


def test_seeded_store_lists_three_movies_in_order(store):
    movies = store.list_all()

    assert [m.id for m in movies] == [1, 2, 3]
    assert [m.title for m in movies] == ["The Shawshank Redemption", "The Dark Knight", "Inception"]
    assert movies[2].release_year == 2010
    assert movies[2].rating == 8.8


def test_create_assigns_next_id(store, dune):
    created = store.create(dune)

    assert created.id == 4
    assert created.title == "Dune"
    assert len(store) == 4


def test_create_ids_strictly_increase(empty_store, dune):
    ids = [empty_store.create(dune).id for _ in range(5)]

    assert ids == [1, 2, 3, 4, 5]


def test_ids_are_not_reused_after_delete(store, dune):
    assert store.delete(3)

    created = store.create(dune)

    assert created.id == 4


def test_get_by_id_after_create_returns_equal_record(store, dune):
    created = store.create(dune)

    result = store.get_by_id(created.id)

    assert result == Found(created)


def test_get_by_id_unknown_is_not_found(store):
    assert store.get_by_id(99) == NotFound(99)


def test_list_all_is_a_snapshot(store):
    movies = store.list_all()
    movies.clear()
    store.list_all()[0].title = "Changed outside"

    assert len(store) == 3
    assert store.list_all()[0].title == "The Shawshank Redemption"


def test_update_replaces_fields_and_keeps_id(store, dune):
    result = store.update(2, dune)

    assert isinstance(result, Found)
    assert result.movie.id == 2
    assert result.movie.title == "Dune"
    assert store.get_by_id(2).movie.rating == 8.0


def test_update_unknown_id_leaves_store_unchanged(store, dune):
    before = store.list_all()

    result = store.update(42, dune)

    assert result == NotFound(42)
    assert store.list_all() == before


def test_delete_twice_is_found_then_not_found(store):
    assert store.delete(1) is True
    assert len(store) == 2
    assert store.delete(1) is False
    assert len(store) == 2
    assert [m.id for m in store.list_all()] == [2, 3]


def test_concurrent_creates_get_unique_ids(empty_store):
    def worker():
        for _ in range(50):
            empty_store.create(SEED_MOVIES[0])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [m.id for m in empty_store.list_all()]
    assert len(ids) == 400
    assert sorted(set(ids)) == list(range(1, 401))


def test_concurrent_create_update_delete_keep_collection_consistent(store, dune):
    deleted = []
    deleted_lock = threading.Lock()

    def worker():
        own_ids = [store.create(dune).id for _ in range(50)]
        for movie_id in own_ids[::2]:
            assert store.delete(movie_id)
            with deleted_lock:
                deleted.append(movie_id)
        for movie_id in own_ids[1::2]:
            assert isinstance(store.update(movie_id, SEED_MOVIES[1]), Found)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    movies = store.list_all()
    ids = [m.id for m in movies]
    assert len(movies) == 3 + 8 * 25
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)
    assert not set(ids) & set(deleted)
    assert all(m.title == "The Dark Knight" for m in movies[3:])
