"""All parser logic to process the XML responses of a WFS server.

This handles:

* Safely parsing the response into an element tree (:mod:`wfsclient.parsers.xml`).
* Mapping that tree into plain Python objects (:mod:`wfsclient.parsers.mapper`),
  driven by the declarative schemas in :mod:`wfsclient.schemas`.
"""
