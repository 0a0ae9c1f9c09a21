"""FHIR R4B (4.3.0) models.

R4B only changed medication-definition and evidence resources, none of
which are modelled here, so every class is the R4 one.
"""

from fhir_toolkit.r4 import *  # noqa: F401,F403
from fhir_toolkit.r4 import RESOURCES, TYPES  # noqa: F401

FHIR_VERSION = "R4B"
