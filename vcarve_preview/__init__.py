"""V-carve preview: render the groove a V-bit cuts from a G-code program.

Architecture layers (strict one-way dependency):
    scripts/ → vcarve_preview/carve/ → vcarve_preview/utils/

Key invariants:
    - Input units are inches, output units are pixels (ppi scale)
    - Stock surface at Z=0; the bit cuts only where Z < 0
    - YAML-only configs
    - Identical input and config give byte-identical SVG
"""

__version__ = "1.0.0"
