from collections.abc import Callable

from strategysuite.project import (
    ProjectState,
    add_business_file,
    build_business_context,
    set_business_details,
)


class TestBuildBusinessContext:
    def test_joins_details_and_file_contents(
        self, make_project: Callable[..., ProjectState]
    ) -> None:
        state = set_business_details("We brew coffee")(make_project())
        state = add_business_file("a.txt", "Beans")(state)
        state = add_business_file("b.txt", "Cups")(state)

        assert build_business_context(state) == (
            "Business Context: We brew coffee. Additional files: Beans Cups"
        )

    def test_empty_project(self, make_project: Callable[..., ProjectState]) -> None:
        assert build_business_context(make_project()) == (
            "Business Context: . Additional files: "
        )
