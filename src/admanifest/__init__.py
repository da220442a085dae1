"""admanifest — ad manifest transformation.

Bind campaign copy, brand colors, custom fonts, and layout edits into an
HTML5 ad template's manifest.js, rewrite its index.html for serving from
any origin, and reconstruct its animation timeline.
"""
