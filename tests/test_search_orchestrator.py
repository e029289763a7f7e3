import asyncio
import unittest
from typing import List

from launcher.cache import FrecencyStore, InMemoryCountRepository, action_identity
from launcher.errors import ConstructionError
from launcher.models import SearchResultItem
from launcher.search import (
    InputValidator,
    InputValidatorSearcherCombination,
    InputValidatorSearcherRegistry,
    SearchOrchestrator,
    Searcher,
)
from launcher.user_config import parse_config


class PrefixValidator(InputValidator):
    def __init__(self, prefix: str):
        self.prefix = prefix

    def is_valid_for(self, query: str) -> bool:
        return query.startswith(self.prefix)


class AcceptAll(InputValidator):
    def is_valid_for(self, query: str) -> bool:
        return True


class ExplodingValidator(InputValidator):
    def is_valid_for(self, query: str) -> bool:
        raise RuntimeError("validator bug")


class StaticSearcher(Searcher):
    def __init__(self, *arguments: str, origin: str = "static"):
        self.arguments = arguments
        self.origin = origin
        self.calls = 0

    def search(self, query: str) -> List[SearchResultItem]:
        self.calls += 1
        return [
            SearchResultItem(name=a, execution_argument=a, origin_category=self.origin)
            for a in self.arguments
        ]


class FailingSearcher(Searcher):
    def search(self, query: str) -> List[SearchResultItem]:
        raise OSError("network unreachable")


def combo(category, validator, searcher, priority=100):
    return InputValidatorSearcherCombination(
        category=category, validator=validator, searcher=searcher, priority=priority
    )


class TestSearchOrchestrator(unittest.TestCase):

    def setUp(self):
        self.store = FrecencyStore(InMemoryCountRepository())

    def _orchestrator(self, combinations, rank_by_usage=True):
        return SearchOrchestrator(
            combinations,
            self.store,
            identity_resolver=lambda argument: action_identity("exec", argument),
            rank_by_usage=rank_by_usage,
        )

    def test_no_accepting_validator_returns_empty(self):
        searcher = StaticSearcher("x")
        orchestrator = self._orchestrator([combo("a", PrefixValidator("?"), searcher)])

        self.assertEqual(asyncio.run(orchestrator.get_search_result("hello")), [])
        self.assertEqual(searcher.calls, 0)

    def test_only_accepting_categories_contribute(self):
        """Items come only from categories whose validator accepted the query."""
        orchestrator = self._orchestrator([
            combo("yes", AcceptAll(), StaticSearcher("a1", "a2")),
            combo("no", PrefixValidator("!"), StaticSearcher("b1")),
        ])

        results = asyncio.run(orchestrator.get_search_result("query"))

        self.assertEqual([r.execution_argument for r in results], ["a1", "a2"])
        self.assertTrue(all(r.origin_category == "yes" for r in results))

    def test_origin_category_is_the_producing_combination(self):
        orchestrator = self._orchestrator([
            combo("programs", AcceptAll(), StaticSearcher("x", origin="something_else")),
        ])
        results = asyncio.run(orchestrator.get_search_result("x"))
        self.assertEqual(results[0].origin_category, "programs")

    def test_priority_orders_equal_counts(self):
        orchestrator = self._orchestrator([
            combo("low", AcceptAll(), StaticSearcher("l1", "l2"), priority=50),
            combo("high", AcceptAll(), StaticSearcher("h1"), priority=10),
        ])

        results = asyncio.run(orchestrator.get_search_result("q"))

        # Searcher order preserved inside a category
        self.assertEqual([r.execution_argument for r in results], ["h1", "l1", "l2"])

    def test_usage_count_beats_priority(self):
        self.store.increment(action_identity("exec", "l2"))
        orchestrator = self._orchestrator([
            combo("low", AcceptAll(), StaticSearcher("l1", "l2"), priority=50),
            combo("high", AcceptAll(), StaticSearcher("h1"), priority=10),
        ])

        results = asyncio.run(orchestrator.get_search_result("q"))

        self.assertEqual(results[0].execution_argument, "l2")

    def test_ranking_is_monotonic_in_count(self):
        """Raising one item's count never moves it down."""
        orchestrator = self._orchestrator([
            combo("a", AcceptAll(), StaticSearcher("a1", "a2", "a3"), priority=1),
            combo("b", AcceptAll(), StaticSearcher("b1", "b2"), priority=2),
        ])

        previous = None
        for _ in range(4):
            results = asyncio.run(orchestrator.get_search_result("q"))
            position = [r.execution_argument for r in results].index("b2")
            if previous is not None:
                self.assertLessEqual(position, previous)
            previous = position
            self.store.increment(action_identity("exec", "b2"))

        self.assertEqual(previous, 0)

    def test_rank_by_usage_disabled(self):
        self.store.increment(action_identity("exec", "l1"))
        orchestrator = self._orchestrator([
            combo("low", AcceptAll(), StaticSearcher("l1"), priority=50),
            combo("high", AcceptAll(), StaticSearcher("h1"), priority=10),
        ], rank_by_usage=False)

        results = asyncio.run(orchestrator.get_search_result("q"))

        self.assertEqual([r.execution_argument for r in results], ["h1", "l1"])

    def test_unresolvable_items_count_zero(self):
        self.store.increment("exec:a1")
        orchestrator = SearchOrchestrator(
            [combo("a", AcceptAll(), StaticSearcher("a1", "a2"))],
            self.store,
            identity_resolver=lambda argument: None,
        )
        results = asyncio.run(orchestrator.get_search_result("q"))
        self.assertEqual([r.execution_argument for r in results], ["a1", "a2"])

    def test_failing_searcher_is_isolated(self):
        """A searcher that raises contributes nothing; the others still answer."""
        orchestrator = self._orchestrator([
            combo("broken", AcceptAll(), FailingSearcher(), priority=0),
            combo("fine", AcceptAll(), StaticSearcher("ok")),
        ])

        results = asyncio.run(orchestrator.get_search_result("q"))

        self.assertEqual([r.execution_argument for r in results], ["ok"])

    def test_failing_validator_is_isolated(self):
        orchestrator = self._orchestrator([
            combo("broken", ExplodingValidator(), StaticSearcher("never")),
            combo("fine", AcceptAll(), StaticSearcher("ok")),
        ])
        results = asyncio.run(orchestrator.get_search_result("q"))
        self.assertEqual([r.execution_argument for r in results], ["ok"])

    def test_same_query_same_result(self):
        orchestrator = self._orchestrator([
            combo("a", AcceptAll(), StaticSearcher("a1", "a2"), priority=3),
            combo("b", AcceptAll(), StaticSearcher("b1"), priority=1),
        ])
        first = asyncio.run(orchestrator.get_search_result("q"))
        second = asyncio.run(orchestrator.get_search_result("q"))
        self.assertEqual(first, second)


class TestInputValidatorSearcherRegistry(unittest.TestCase):

    def test_default_registry_builds_enabled_categories(self):
        registry = InputValidatorSearcherRegistry(parse_config({}))
        categories = [c.category for c in registry.combinations()]

        self.assertEqual(registry.diagnostics, [])
        for expected in ("programs", "file_path", "calculator", "web_url",
                         "web_search", "command_line", "custom_commands", "launcher_commands"):
            self.assertIn(expected, categories)

    def test_disabled_category_is_absent(self):
        registry = InputValidatorSearcherRegistry(parse_config({"calculator": {"enabled": False}}))
        self.assertNotIn("calculator", [c.category for c in registry.combinations()])

    def test_priority_comes_from_config(self):
        registry = InputValidatorSearcherRegistry(parse_config({"web_url": {"priority": 3}}))
        priorities = {c.category: c.priority for c in registry.combinations()}
        self.assertEqual(priorities["web_url"], 3)

    def test_construction_failure_is_recorded_and_skipped(self):
        """A category whose construction fails is omitted, the rest are kept."""
        config = parse_config({"web_search": {"engines": [
            {"name": "Broken", "prefix": "b?", "url": "https://example.com/search"}
        ]}})

        registry = InputValidatorSearcherRegistry(config)

        categories = [c.category for c in registry.combinations()]
        self.assertNotIn("web_search", categories)
        self.assertIn("calculator", categories)
        self.assertEqual(len(registry.diagnostics), 1)
        self.assertIsInstance(registry.diagnostics[0], ConstructionError)
        self.assertEqual(registry.diagnostics[0].category, "web_search")

    def test_custom_category_table(self):
        def factory(config):
            return AcceptAll(), StaticSearcher("x")

        def broken(config):
            raise RuntimeError("no such folder")

        registry = InputValidatorSearcherRegistry(
            parse_config({}), categories=[("programs", factory), ("file_path", broken)]
        )

        self.assertEqual([c.category for c in registry.combinations()], ["programs"])
        self.assertEqual([e.category for e in registry.diagnostics], ["file_path"])

    def test_combinations_returns_a_copy(self):
        registry = InputValidatorSearcherRegistry(parse_config({}))
        registry.combinations().clear()
        self.assertTrue(registry.combinations())


if __name__ == "__main__":
    unittest.main()
