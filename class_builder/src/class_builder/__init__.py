"""
Generate entity classes for RDF-backed applications from RDFS/OWL ontologies.
"""

import logging

logger = logging.getLogger("class_builder")
logger.setLevel(logging.DEBUG)

# Handler
handler = logging.StreamHandler()
handler.setLevel(logging.INFO)  # <-- this filters out DEBUG messages
logger.addHandler(handler)
