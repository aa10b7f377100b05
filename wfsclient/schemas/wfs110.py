"""Capabilities schema for WFS 1.1.0.

WFS 1.1 moved the service metadata into the OWS 1.0 common elements
(``<ows:ServiceIdentification>`` and ``<ows:ServiceProvider>``),
hence the "Service" schema is applied to the document root.
"""

from wfsclient.parsers.xml import xmlns

from .base import FieldMapping, Schema, VersionSchemaBundle, schema_registry

NAMESPACES = {
    "wfs": xmlns.wfs1.value,
    "ows": xmlns.ows10.value,
    "ogc": xmlns.ogc.value,
    "xlink": xmlns.xlink.value,
}

RESULT_FORMATS = {
    "text/xml; subtype=gml/3.1.1": "GML v3.1.1",
    "text/xml; subtype=gml/2.1.2": "GML v2.1.2",
    "GML2": "GML v2",
    "SHAPE-ZIP": "Shapefile",
    "CSV": "CSV",
    "application/json": "GeoJSON",
}

WFS_110 = schema_registry.register(
    VersionSchemaBundle.from_schemas(
        "1.1.0",
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
