"""Behaviour of the in-memory customer directory."""

from concurrent.futures import ThreadPoolExecutor

from customer_manager.service import InMemoryCustomerService


def test_seeded_with_three_customers(service):
    customers = service.get_all()
    assert [(c.id, c.name, c.email) for c in customers] == [
        (1, "John Doe", "john@example.com"),
        (2, "Jane Smith", "jane@example.com"),
        (3, "Bob Wilson", "bob@example.com"),
    ]
    assert len({c.created_at for c in customers}) == 1


def test_create_assigns_max_plus_one(service):
    service.delete(2)
    created = service.create("Ann Lee", "ann@x.com")
    assert created.id == 4
    assert service.get_all()[-1] is created


def test_create_on_empty_collection_starts_at_one():
    service = InMemoryCustomerService(seed=False)
    assert service.get_all() == []
    assert service.create("Ann Lee", "ann@x.com").id == 1


def test_id_reused_after_highest_record_deleted(service):
    assert service.delete(3)
    assert service.create("Ann Lee", "ann@x.com").id == 3


def test_get_all_returns_a_snapshot(service):
    snapshot = service.get_all()
    snapshot.clear()
    assert len(service.get_all()) == 3


def test_get_by_id(service):
    assert service.get_by_id(2).name == "Jane Smith"
    assert service.get_by_id(2) == service.get_by_id(2)
    assert service.get_by_id(99) is None
    assert service.get_by_id(0) is None
    assert service.get_by_id(-1) is None


def test_search_is_case_insensitive_substring(service):
    for query in ("doe", "DOE", "dOe", "John D"):
        assert service.search_by_name(query).id == 1


def test_search_returns_first_match_only(service):
    service.create("Johnny Appleseed", "johnny@example.com")
    assert service.search_by_name("john").id == 1


def test_search_absent_or_blank(service):
    assert service.search_by_name("zzz") is None
    assert service.search_by_name("") is None
    assert service.search_by_name("   ") is None
    assert service.search_by_name(None) is None


def test_search_skips_records_without_name(service):
    service.get_by_id(1).name = None
    assert service.search_by_name("doe") is None


def test_update_keeps_id_and_created_at(service):
    before = service.get_by_id(1).created_at
    updated = service.update(1, "John Q. Doe", "jq@example.com")
    assert updated.id == 1
    assert updated.created_at == before
    assert service.get_by_id(1).email == "jq@example.com"


def test_update_missing_leaves_collection_unchanged(service):
    before = [c.model_dump() for c in service.get_all()]
    assert service.update(42, "X", "x@example.com") is None
    assert [c.model_dump() for c in service.get_all()] == before


def test_delete_then_lookup(service):
    assert service.delete(1) is True
    assert service.get_by_id(1) is None
    assert service.delete(1) is False


def test_survivors_keep_insertion_order(service):
    service.create("Ann Lee", "ann@x.com")
    service.create("Tom Park", "tom@x.com")
    service.delete(2)
    service.delete(4)
    assert [c.id for c in service.get_all()] == [1, 3, 5]


def test_end_to_end_scenario(service):
    ann = service.create("Ann Lee", "ann@x.com")
    assert ann.id == 4
    customers = service.get_all()
    assert len(customers) == 4
    assert customers[-1].name == "Ann Lee"

    assert service.delete(2)
    customers = service.get_all()
    assert len(customers) == 3
    assert all(c.id != 2 for c in customers)
    assert service.search_by_name("jane") is None


def test_concurrent_creates_get_distinct_contiguous_ids(service):
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda n: service.create(f"Customer {n}", f"c{n}@x.com"), range(50)))

    ids = sorted(c.id for c in created)
    assert ids == list(range(4, 54))
    assert len(service.get_all()) == 53
