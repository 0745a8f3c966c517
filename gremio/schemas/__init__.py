"""
Gremio Schemas.

Pydantic models for request validation.
"""

from gremio.schemas.account import *
from gremio.schemas.verification import *
from gremio.schemas.auth import *
from gremio.schemas.applications import *
