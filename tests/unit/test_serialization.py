"""
Unit tests for the tagged serialization registry.
"""

import json

import pytest

from neurostrand import serialization
from neurostrand.genotype.genome import Genome
from neurostrand.serialization import (deserialize, dumps, loads, register,
                                       registered_types, serialize, tag_of)


@pytest.fixture
def clean_registry():
    """Restore the registry after a test registers its own classes."""
    saved = serialization._registry.copy()
    yield
    serialization._registry.clear()
    serialization._registry.update(saved)


# ============================================================================
# Test: Registration
# ============================================================================

class TestRegister:
    """Test the 'register' decorator."""

    def test_genome_registered_as_strand(self):
        assert registered_types()["strand"] is Genome
        assert Genome._type_tag == "strand"

    def test_register_new_class(self, clean_registry):
        @register("point")
        class Point:
            def __init__(self, x):
                self.x = x

            def to_dict(self):
                return {"x": self.x}

            @classmethod
            def from_dict(cls, data):
                return cls(data["x"])

        assert registered_types()["point"] is Point
        assert deserialize(serialize(Point(3))).x == 3

    def test_reregistering_same_class_allowed(self, clean_registry):
        assert register("strand")(Genome) is Genome

    def test_tag_taken_by_other_class_raises_error(self, clean_registry):
        with pytest.raises(ValueError, match="already registered"):
            @register("strand")
            class Impostor:
                pass

    def test_registered_types_is_a_copy(self):
        registered_types()["bogus"] = object

        assert "bogus" not in registered_types()


# ============================================================================
# Test: Serialization
# ============================================================================

class TestSerialize:
    """Test serialize(), deserialize(), dumps() and loads()."""

    def test_serialize_genome(self, random, tracker):
        genome = Genome(2, 1, True, random, tracker)

        payload = serialize(genome)

        assert payload == {"type": "strand", "data": genome.to_dict()}

    def test_round_trip(self, random, tracker):
        genome = Genome(2, 2, True, random, tracker)
        genome.add_random_node_gene(random, tracker)

        restored = deserialize(serialize(genome))

        assert isinstance(restored, Genome)
        assert restored == genome
        assert restored is not genome

    def test_json_round_trip(self, random, tracker):
        genome = Genome(3, 1, False, random, tracker)
        genome.add_random_node_gene(random, tracker)

        text = dumps(genome)

        assert json.loads(text)["type"] == "strand"
        assert loads(text) == genome

    def test_dumps_forwards_json_options(self, random, tracker):
        text = dumps(Genome(1, 1, True, random, tracker), indent=2)

        assert "\n" in text

    def test_unregistered_object_raises_error(self):
        with pytest.raises(TypeError, match="not registered"):
            serialize(object())

    def test_tag_of_subclass_not_inherited(self):
        class SubGenome(Genome):
            pass

        with pytest.raises(TypeError):
            tag_of(SubGenome())

    def test_unknown_tag_raises_error(self):
        with pytest.raises(KeyError, match="Unknown type tag"):
            deserialize({"type": "mystery", "data": {}})

    def test_invalid_data_propagates_error(self):
        payload = {"type": "strand",
                   "data": {"nodes": [{"id": 1, "type": "input"}, {"id": 1, "type": "input"}]}}

        with pytest.raises(ValueError, match="Duplicate node ID"):
            deserialize(payload)
