"""
Credit aggregation tests: dedup, ordering, idempotence, replacement.
"""

from floodscene.credits import CreditAggregator, aggregate_credits, credit_tokens
from floodscene.models import Tile


def nested(copyright, tile_id=None):
    """A tile shaped like the renderer's 3D-tiles payload."""
    return {"id": tile_id, "content": {"gltf": {"asset": {"copyright": copyright}}}}


class TestAggregate:

    def test_each_credit_once_in_first_seen_order(self):
        result = aggregate_credits([Tile("A;B"), Tile("B;C")])
        assert result == "A; B; C"
        for token in ("A", "B", "C"):
            assert result.split("; ").count(token) == 1

    def test_nested_tile_dicts(self):
        assert aggregate_credits([nested("Google;Airbus"), nested("Google")]) == "Google; Airbus"

    def test_flat_tile_dicts(self):
        assert aggregate_credits([{"copyright": "X"}, {"copyright": "Y;X"}]) == "X; Y"

    def test_case_sensitive(self):
        assert credit_tokens([Tile("Google;google")]) == ["Google", "google"]

    def test_whitespace_sensitive(self):
        assert credit_tokens([Tile("A; B"), Tile("B")]) == ["A", " B", "B"]

    def test_tiles_without_attribution_are_skipped(self):
        tiles = [Tile(None), nested(None), {"content": None}, Tile("A")]
        assert aggregate_credits(tiles) == "A"

    def test_empty_tokens_dropped(self):
        assert credit_tokens([Tile("A;;B;")]) == ["A", "B"]

    def test_no_tiles(self):
        assert aggregate_credits([]) == ""


class TestAggregator:

    def test_same_input_same_output(self):
        aggregator = CreditAggregator()
        tiles = [Tile("A;B"), Tile("B;C")]
        first = aggregator.on_traversal_complete(tiles)
        second = aggregator.on_traversal_complete(tiles)
        assert first == second == "A; B; C"

    def test_traversal_replaces_previous_credits(self):
        aggregator = CreditAggregator()
        aggregator.on_traversal_complete([Tile("Old")])
        assert aggregator.on_traversal_complete([Tile("New")]) == "New"
        assert aggregator.credits == "New"

    def test_result_independent_of_history(self):
        fresh = CreditAggregator()
        used = CreditAggregator()
        used.on_traversal_complete([Tile("Z;Y")])
        tiles = [Tile("A"), Tile("Y")]
        assert used.on_traversal_complete(tiles) == fresh.on_traversal_complete(tiles)

    def test_accepts_generator(self):
        aggregator = CreditAggregator()
        assert aggregator.on_traversal_complete(Tile(c) for c in ("A", "B")) == "A; B"
        assert aggregator.traversals == 1

    def test_clear(self):
        aggregator = CreditAggregator()
        aggregator.on_traversal_complete([Tile("A")])
        aggregator.clear()
        assert aggregator.credits == ""
