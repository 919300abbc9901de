"""Tests for the layer model: Layer, Rank, LayerModel and record types."""

import pytest

from onion_imports.exceptions import ConfigurationError, InvalidConfigError
from onion_imports.layers.models import (
    Classification,
    Layer,
    LayerModel,
    Rank,
    RankKind,
    ReferenceEdge,
    Violation,
    build_model,
)


class TestLayer:
    def test_patterns_become_tuple(self):
        layer = Layer("UI", ["src/ui/"])
        assert layer.patterns == ("src/ui/",)

    def test_identity_not_value_equality(self):
        a = Layer("UI", ("src/ui/",))
        b = Layer("UI", ("src/ui/",))
        assert a == a
        assert a != b
        assert len({a, b}) == 2

    def test_contains(self):
        layer = Layer("UI", ("src/ui/", "src/views/"))
        assert layer.contains("src/views/home.tsx")
        assert not layer.contains("src/main.ts")

    def test_immutable(self):
        layer = Layer("UI", ("src/ui/",))
        with pytest.raises(AttributeError):
            layer.name = "Other"

    @pytest.mark.parametrize(
        "name,patterns",
        [
            ("", ("src/ui/",)),
            (None, ("src/ui/",)),
            ("UI", ()),
            ("UI", ("",)),
            ("UI", ("src/ui/", 3)),
            ("UI", "src/ui/"),
        ],
    )
    def test_invalid_layers_rejected(self, name, patterns):
        with pytest.raises(InvalidConfigError):
            Layer(name, patterns)


class TestRank:
    def test_single(self):
        layer = Layer("Core", ("src/core/",))
        rank = Rank.single(layer)
        assert rank.kind is RankKind.SINGLE
        assert rank.layers == (layer,)
        assert not rank.is_parallel

    def test_parallel_keeps_declaration_order(self):
        layers = [Layer(n, (f"src/{n}/",)) for n in ("ui", "api", "cli")]
        rank = Rank.parallel(layers)
        assert rank.is_parallel
        assert rank.names == ["ui", "api", "cli"]

    def test_empty_parallel_group_rejected(self):
        with pytest.raises(InvalidConfigError):
            Rank.parallel([])

    def test_duplicate_names_in_group_rejected(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            Rank.parallel([Layer("UI", ("a/",)), Layer("UI", ("b/",))])
        assert exc_info.value.value == ["UI"]


class TestLayerModelFromConfig:
    def test_reference_configuration(self, reference_layers):
        model = LayerModel.from_config(reference_layers)
        assert len(model) == 3
        assert model[0].is_parallel
        assert model[0].names == ["UI", "Data Access", "WCF", "IO"]
        assert model[1].names == ["Business Logic"]
        assert model[2].names == ["Object Model"]

    def test_layers_iterates_outermost_first(self, reference_model):
        names = [(i, layer.name) for i, layer in reference_model.layers()]
        assert names[0] == (0, "UI")
        assert names[-1] == (2, "Object Model")
        assert len(names) == 6

    def test_to_config_restores_shape(self, reference_layers):
        model = LayerModel.from_config(reference_layers)
        assert model.to_config() == reference_layers

    def test_single_layer_groups_allowed(self):
        model = LayerModel.from_config(
            [[{"name": "UI", "patterns": ["ui/"]}], {"name": "Core", "patterns": ["core/"]}]
        )
        assert model[0].is_parallel
        assert model[0].names == ["UI"]

    def test_same_name_in_different_ranks_allowed(self):
        model = LayerModel.from_config(
            [{"name": "Same", "patterns": ["a/"]}, {"name": "Same", "patterns": ["b/"]}]
        )
        assert model[0].layers[0] is not model[1].layers[0]

    @pytest.mark.parametrize(
        "layers",
        [
            [],
            [{"name": "Only", "patterns": ["src/"]}],
            [[{"name": "A", "patterns": ["a/"]}, {"name": "B", "patterns": ["b/"]}]],
        ],
    )
    def test_fewer_than_two_ranks(self, layers):
        with pytest.raises(InvalidConfigError) as exc_info:
            LayerModel.from_config(layers)
        assert exc_info.value.key == "layers"

    def test_empty_parallel_group(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            LayerModel.from_config([[], {"name": "Core", "patterns": ["core/"]}])
        assert exc_info.value.key == "layers[0]"

    def test_empty_name(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            LayerModel.from_config(
                [{"name": "", "patterns": ["a/"]}, {"name": "Core", "patterns": ["core/"]}]
            )
        assert exc_info.value.key == "layers[0].name"

    def test_zero_patterns_in_group_member(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            LayerModel.from_config(
                [
                    [{"name": "UI", "patterns": ["ui/"]}, {"name": "API", "patterns": []}],
                    {"name": "Core", "patterns": ["core/"]},
                ]
            )
        assert exc_info.value.key == "layers[0][1].patterns"

    def test_empty_pattern_string(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            LayerModel.from_config(
                [{"name": "UI", "patterns": ["ui/", ""]}, {"name": "Core", "patterns": ["core/"]}]
            )
        assert exc_info.value.key == "layers[0].patterns[1]"

    @pytest.mark.parametrize(
        "item",
        [
            "src/ui/",
            {"name": "UI"},
            {"patterns": ["ui/"]},
            {"name": "UI", "patterns": ["ui/"], "extra": True},
            {"name": "UI", "patterns": "ui/"},
        ],
    )
    def test_malformed_layer_tables(self, item):
        with pytest.raises(InvalidConfigError):
            LayerModel.from_config([item, {"name": "Core", "patterns": ["core/"]}])

    def test_not_a_list(self):
        with pytest.raises(InvalidConfigError):
            LayerModel.from_config({"name": "UI", "patterns": ["ui/"]})

    def test_errors_are_configuration_errors(self):
        with pytest.raises(ConfigurationError):
            LayerModel.from_config([])


class TestBuildModel:
    def test_mixes_single_and_parallel(self):
        ui, api, core = Layer("UI", ("ui/",)), Layer("API", ("api/",)), Layer("Core", ("core/",))
        model = build_model([[ui, api], core])
        assert model[0].layers == (ui, api)
        assert model[1].kind is RankKind.SINGLE


class TestRecords:
    def test_edge_source_dir(self):
        edge = ReferenceEdge("src/ui/foo.js", "../bar")
        assert edge.source_dir == "src/ui"
        assert ReferenceEdge("main.js", "./x").source_dir == ""

    def test_violation_message(self):
        violation = Violation(source_layer="Business Logic", target_layer="UI")
        assert (
            violation.message
            == 'it is forbidden to reference layer "UI" from layer "Business Logic"'
        )

    def test_classification_equality_uses_layer_identity(self):
        layer = Layer("UI", ("ui/",))
        assert Classification(0, layer) == Classification(0, layer)
        assert Classification(0, layer) != Classification(0, Layer("UI", ("ui/",)))
