"""Capabilities schema for WFS 2.0.0.

This has the same structure as WFS 1.1, using the OWS 1.1 and WFS 2.0 namespaces.
"""

from wfsclient.parsers.xml import xmlns

from .base import FieldMapping, Schema, VersionSchemaBundle, schema_registry

NAMESPACES = {
    "wfs": xmlns.wfs20.value,
    "ows": xmlns.ows11.value,
    "fes": xmlns.fes20.value,
    "xlink": xmlns.xlink.value,
}

RESULT_FORMATS = {
    "application/gml+xml; version=3.2": "GML v3.2",
    "text/xml; subtype=gml/3.2": "GML v3.2",
    "text/xml; subtype=gml/3.1.1": "GML v3.1.1",
    "SHAPE-ZIP": "Shapefile",
    "CSV": "CSV",
    "application/json": "GeoJSON",
}

WFS_200 = schema_registry.register(
    VersionSchemaBundle.from_schemas(
        "2.0.0",
        namespaces=NAMESPACES,
        schemas=[
            Schema(
                "Main",
                [
                    FieldMapping(".", "service", schema="Service"),
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
                    FieldMapping("./ows:ServiceIdentification/ows:ServiceType", "name"),
                    FieldMapping("./ows:ServiceIdentification/ows:Title", "title"),
                    FieldMapping("./ows:ServiceIdentification/ows:Abstract", "abstract"),
                    FieldMapping(
                        "./ows:ServiceIdentification/ows:Keywords/ows:Keyword",
                        "keywords",
                        multi=True,
                    ),
                    FieldMapping(
                        "./ows:ServiceProvider/ows:ProviderSite/@xlink:href", "location"
                    ),
                    FieldMapping("./ows:ServiceIdentification/ows:Fees", "fees"),
                    FieldMapping(
                        "./ows:ServiceIdentification/ows:AccessConstraints", "accessConstraints"
                    ),
                ],
            ),
            Schema(
                "FeatureType",
                [
                    FieldMapping("./wfs:Name", "name"),
                    FieldMapping("./wfs:Title", "title"),
                    FieldMapping("./wfs:Abstract", "abstract"),
                    FieldMapping("./ows:Keywords/ows:Keyword", "keywords", multi=True),
                ],
            ),
        ],
        result_formats=RESULT_FORMATS,
    )
)
