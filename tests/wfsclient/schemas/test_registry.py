import pytest

from wfsclient.exceptions import VersionNotSupported
from wfsclient.parsers.mapper import DocumentMapper
from wfsclient.parsers.xml import parse_xml_from_string
from wfsclient.schemas import SchemaRegistry, VersionSchemaBundle, schema_registry
from tests.utils import read_file

EXPECTED_FEATURE_TYPES = [
    {
        "name": "app:restaurant",
        "title": "Restaurants",
        "abstract": "All restaurants in the city.",
    },
    {
        "name": "app:park",
        "title": "Parks",
        "keywords": [],
    },
]


def _bundle(version):
    return VersionSchemaBundle.from_schemas(version, namespaces={}, schemas=[])


class TestSchemaRegistry:
    """Prove that versions are registered and ordered."""

    def test_supported_versions(self):
        assert schema_registry.versions == ("1.0.0", "1.1.0", "2.0.0")
        assert schema_registry.latest_version == "2.0.0"
        assert "1.1.0" in schema_registry
        assert "1.2.0" not in schema_registry

    def test_semver_ordering(self):
        registry = SchemaRegistry()
        for version in ("10.0.0", "2.0.0", "1.10.0", "1.9.0"):
            registry.register(_bundle(version))

        assert registry.versions == ("1.9.0", "1.10.0", "2.0.0", "10.0.0")
        assert registry.latest_version == "10.0.0"
        assert len(registry) == 4

    def test_invalid_version(self):
        with pytest.raises(ValueError, match="Invalid version number"):
            SchemaRegistry().register(_bundle("2.0"))

    def test_duplicate_version(self):
        registry = SchemaRegistry()
        registry.register(_bundle("2.0.0"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_bundle("2.0.0"))

    def test_unknown_version(self):
        with pytest.raises(VersionNotSupported):
            schema_registry["1.2.0"]

    def test_empty_registry(self):
        with pytest.raises(RuntimeError):
            SchemaRegistry().latest_version

    def test_result_format_label(self):
        assert schema_registry.get_result_format_label("1.0.0", "SHAPE-ZIP") == "Shapefile"
        assert schema_registry.get_result_format_label("2.0.0", "application/json") == "GeoJSON"
        assert schema_registry.get_result_format_label("2.0.0", "KML") == "KML"


class TestVersionSchemas:
    """Prove that all versions produce the same output format."""

    def _parse(self, version, file_name):
        root = parse_xml_from_string(read_file(file_name))
        return DocumentMapper(schema_registry[version]).build_object(root, "Main")

    def test_wfs100(self):
        result = self._parse("1.0.0", "wfs100_capabilities.xml")
        assert result["service"] == {
            "name": "Test Server",
            "title": "Places of Amsterdam",
            "abstract": "Restaurants and parks in Amsterdam.",
            "keywords": ["places", "amsterdam"],
            "location": "https://example.com/wfs",
            "fees": "NONE",
            "accessConstraints": "NONE",
        }
        assert result["featureTypes"] == [
            {**EXPECTED_FEATURE_TYPES[0], "keywords": ["food"]},
            EXPECTED_FEATURE_TYPES[1],
        ]

    @pytest.mark.parametrize(
        "version,file_name",
        [("1.1.0", "wfs110_capabilities.xml"), ("2.0.0", "wfs200_capabilities.xml")],
    )
    def test_ows_versions(self, version, file_name):
        result = self._parse(version, file_name)
        assert result["service"] == {
            "name": "WFS",
            "title": "Places of Amsterdam",
            "abstract": "Restaurants and parks in Amsterdam.",
            "keywords": ["places", "amsterdam"],
            "location": "https://example.com/",
            "fees": "NONE",
            "accessConstraints": "NONE",
        }
        assert result["featureTypes"] == [
            {**EXPECTED_FEATURE_TYPES[0], "keywords": ["food", "drinks"]},
            EXPECTED_FEATURE_TYPES[1],
        ]

    def test_wrong_version_finds_nothing(self):
        """Namespaces are version specific, so a 2.0 document has no 1.0 content."""
        result = self._parse("1.0.0", "wfs200_capabilities.xml")
        assert result == {"featureTypes": []}

    @pytest.mark.parametrize("version", ["1.0.0", "1.1.0", "2.0.0"])
    def test_schemas_are_valid(self, version):
        """All selectors of the bundled schemas resolve their namespaces."""
        DocumentMapper(schema_registry[version])
