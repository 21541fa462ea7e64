import pytest

from storefront.repos.memory_repo import InMemoryZoneRepository
from storefront.services.cart_pruner import CartPruner


@pytest.fixture
def repo():
    repo = InMemoryZoneRepository()
    repo.add_user(1)
    repo.add_cart(10, user_id=1)
    repo.add_item(100, cart_id=10, store_id=1)
    repo.add_item(101, cart_id=10, store_id=2)
    repo.add_item(102, cart_id=10, store_id=2)
    # someone else's cart
    repo.add_cart(20, user_id=2)
    repo.add_item(200, cart_id=20, store_id=2)
    return repo


def test_empty_allowed_set_deletes_every_item(repo):
    removed = CartPruner(repo).remove_items_outside_zone(10, [])

    assert removed == 3
    assert repo.cart_store_ids(10) == []


def test_none_allowed_set_is_treated_as_empty(repo):
    assert CartPruner(repo).remove_items_outside_zone(10, None) == 3


def test_only_allowed_stores_survive(repo):
    removed = CartPruner(repo).remove_items_outside_zone(10, [1])

    assert removed == 2
    assert repo.cart_store_ids(10) == [1]


def test_other_carts_are_untouched(repo):
    CartPruner(repo).remove_items_outside_zone(10, [])

    assert repo.cart_store_ids(20) == [2]


def test_rerun_is_a_no_op(repo):
    pruner = CartPruner(repo)
    pruner.remove_items_outside_zone(10, {1})
    after_first = repo.cart_store_ids(10)

    assert pruner.remove_items_outside_zone(10, {1}) == 0
    assert repo.cart_store_ids(10) == after_first


def test_missing_cart_is_not_an_error(repo):
    assert CartPruner(repo).remove_items_outside_zone(999, [1]) == 0
    assert CartPruner(repo).remove_items_outside_zone(999, []) == 0
