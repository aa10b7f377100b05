"""Capabilities schema for WFS 1.0.0.

The service metadata lives directly in the ``<wfs:Service>`` element.
"""

from wfsclient.parsers.xml import xmlns

from .base import FieldMapping, Schema, VersionSchemaBundle, schema_registry

NAMESPACES = {
    "wfs": xmlns.wfs1.value,
    "ogc": xmlns.ogc.value,
}

RESULT_FORMATS = {
    "GML2": "GML v2",
    "GML3": "GML v3",
    "SHAPE-ZIP": "Shapefile",
    "CSV": "CSV",
    "JSON": "GeoJSON",
}

WFS_100 = schema_registry.register(
    VersionSchemaBundle.from_schemas(
        "1.0.0",
        namespaces=NAMESPACES,
        schemas=[
            Schema(
                "Main",
                [
                    FieldMapping("./wfs:Service", "service", schema="Service"),
                    FieldMapping(
                        "./wfs:FeatureTypeList/wfs:FeatureType",
                        "featureTypes",
                        multi=True,
                        schema="FeatureType",
                    ),
                ],
            ),
            Schema(
                "Service",
                [
                    FieldMapping("./wfs:Name", "name"),
                    FieldMapping("./wfs:Title", "title"),
                    FieldMapping("./wfs:Abstract", "abstract"),
                    FieldMapping("./wfs:Keywords", "keywords", multi=True, separator=","),
                    FieldMapping("./wfs:OnlineResource", "location"),
                    FieldMapping("./wfs:Fees", "fees"),
                    FieldMapping("./wfs:AccessConstraints", "accessConstraints"),
                ],
            ),
            Schema(
                "FeatureType",
                [
                    FieldMapping("./wfs:Name", "name"),
                    FieldMapping("./wfs:Title", "title"),
                    FieldMapping("./wfs:Abstract", "abstract"),
                    FieldMapping("./wfs:Keywords", "keywords", multi=True, separator=","),
                ],
            ),
        ],
        result_formats=RESULT_FORMATS,
    )
)
