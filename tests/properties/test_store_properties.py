"""Property-based tests for ProjectStore timestamps and ordering."""

from hypothesis import given, strategies as st

from strategysuite.project import new_project, set_business_details
from strategysuite.store import ProjectStore
from strategysuite.utils import create_logger

LOGGER = create_logger(level="error")

clock_readings = st.lists(
    st.integers(min_value=0, max_value=2**42), min_size=1, max_size=20
)


@given(readings=clock_readings)
def test_last_updated_never_moves_backwards(readings: list[int]) -> None:
    """Property: updates refresh last_updated monotonically, whatever the clock says."""
    ticks = iter([readings[0], *readings])
    store = ProjectStore(clock=lambda: next(ticks), logger=LOGGER)
    project = store.create_project("Acme")

    stamps = [project.last_updated]
    for index in range(len(readings)):
        updated = store.update_project(project.id, set_business_details(str(index)))
        assert updated is not None
        stamps.append(updated.last_updated)

    assert stamps == sorted(stamps)
    assert stamps[-1] == max(readings)


@given(stamps=st.lists(st.integers(min_value=0, max_value=10**12), max_size=10))
def test_replace_all_orders_newest_first(stamps: list[int]) -> None:
    """Property: hydrated projects are listed by descending last_updated."""
    store = ProjectStore(logger=LOGGER)
    store.replace_all(
        new_project(f"p{i}", f"Project {i}", stamp) for i, stamp in enumerate(stamps)
    )

    listed = [p.last_updated for p in store.projects]
    assert listed == sorted(stamps, reverse=True)
