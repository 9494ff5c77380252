"""Flash Clock subtitle service.

This service handles:
- Decoding configuration tokens into resolved clock settings
- Generating WebVTT cues that show the current wall-clock time
- Serving the addon manifest and subtitle track references
"""

__version__ = "1.0.0"
