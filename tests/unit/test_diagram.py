"""Unit tests for diagram assembly."""

import json

import yaml

from spytial.config import SpytialConfig
from spytial.decorators import AnnotationBuilder
from spytial.diagram import build_diagram


class TestBuildDiagram:
    """Test combining the instance with root and nested decorators."""

    def test_root_then_nested(self, company, context):
        context.annotate(company, AnnotationBuilder.flag("root"))
        diagram = build_diagram(company, context)

        assert [c.kind for c in diagram.decorators.constraints] == ["orientation"]
        assert [d.kind for d in diagram.decorators.directives] == ["hideField", "flag", "atomColor"]

    def test_payload(self, company, context):
        instance_json, decorators_yaml = build_diagram(company, context).to_payload()

        assert json.loads(instance_json)["atoms"][0] == {"id": "atom0", "type": "Company", "label": "Company"}
        assert yaml.safe_load(decorators_yaml)["directives"][-1] == {
            "atomColor": {"selector": "Person", "value": "blue"}
        }

    def test_config_applied(self, company, context):
        config = SpytialConfig(export={"idPrefix": "n"})
        diagram = build_diagram(company, context, config)
        assert diagram.instance.atoms[0].id == "n0"

    def test_plain_value(self, context):
        diagram = build_diagram([1, 2], context)
        assert diagram.decorators.is_empty
        assert len(diagram.instance.atoms) == 3
