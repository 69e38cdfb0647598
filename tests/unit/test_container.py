"""Unit tests for the service container"""
import pytest

from sidequest.db.progress_store import InMemoryProgressStore
from sidequest.services import container as container_module
from sidequest.services.container import ServiceContainer, get_container, init_container, reset_container
from sidequest.services.progression_service import ProgressionService
from sidequest.services.quest_service import QuestService


@pytest.fixture(autouse=True)
def clean_container():
    reset_container()
    yield
    reset_container()


def test_get_container_before_init():
    with pytest.raises(RuntimeError):
        get_container()


def test_init_container():
    store = InMemoryProgressStore()

    container = init_container(store)

    assert get_container() is container
    assert container.store is store


def test_services_are_lazy_singletons():
    container = ServiceContainer(store=InMemoryProgressStore())

    assert container._progression_service is None
    assert isinstance(container.progression_service, ProgressionService)
    assert container.progression_service is container.progression_service
    assert isinstance(container.quest_service, QuestService)
    assert container.quest_service is container.quest_service


def test_quest_service_receives_generator():
    async def generator(player_class, count):
        return []

    container = init_container(InMemoryProgressStore(), quest_generator=generator)

    assert container.quest_service.generator is generator
    assert container.quest_service.store is container.progression_service.store


def test_reset_container():
    init_container(InMemoryProgressStore())
    reset_container()

    assert container_module._container is None
