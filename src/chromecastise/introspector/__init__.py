"""Media inspection for chromecastise.

- MediaInspector: Protocol defining the inspection interface
- MediainfoInspector: Production implementation using the mediainfo CLI
- StubInspector: Canned results for tests
- MediaProbe: Container/codec names reported for one file
"""

from chromecastise.introspector.interface import (
    MediaInspector,
    MediaProbe,
    ProbeRequest,
    check_extension,
)
from chromecastise.introspector.mediainfo import MediainfoInspector
from chromecastise.introspector.stub import StubInspector

__all__ = [
    "MediaInspector",
    "MediaProbe",
    "MediainfoInspector",
    "ProbeRequest",
    "StubInspector",
    "check_extension",
]
