"""Shared test fixtures for admanifest tests."""

import pytest


# A manifest as the export tool writes it: unquoted keys, mixed quotes,
# string-typed timings, a trailing comma and a comment.
SAMPLE_MANIFEST_JS = """window.manifest = {
  // exported by the ad builder
  settings: {
    width: 300,
    height: 600,
    dynamicValues: [
      {id: "dv1", name: "s0_headline", defaultValue: "OLD"},
      {id: "dv2", name: "s0_bodycopy", defaultValue: "Old body"},
      {id: "dv3", name: 's0_ctaText', defaultValue: 'Shop'},
      {id: "dv4", name: "s0_logoUrl", defaultValue: "logo.png"},
    ],
    webFonts: [],
  },
  shots: [{index: 0, duration: 6}, {index: 1, duration: 4}],
  animationGroups: [
    {id: "g1", name: "intro", delay: 0.5, duration: "1.0"},
    {id: "g2", name: "copy", delay: "0.2", duration: "0.5"},
    {id: "g3", name: "cta", delay: 0, duration: "2.0"},
  ],
  layers: [
    {
      name: "logo", guid: "L1", fileType: "png", isDynamic: true,
      shots: [{index: 0, pos: {x: 10, y: 10}, size: {w: 100, h: 100, initW: 100, initH: 100},
               timelines: [{id: "t1", trigger: "Timestamp",
                            steps: [{settings: {animationType: "from", delay: "0.3", duration: "0.4", opacity: 0}}]}]}],
    },
    {
      name: "maincopy", guid: "L2", fileType: "text", className: "maincopy",
      shots: [{index: 0, pos: {x: 20, y: 200}, size: {w: 260, h: 80},
               timelines: [{id: "t2", trigger: "g2",
                            steps: [{settings: {animationType: "from", delay: "0", duration: "0.5", y: 20}}]}]}],
    },
    {
      name: "subcopy", guid: "L3", fileType: "text", className: "subcopy",
      shots: [{index: 0, pos: {x: 20, y: 300}, size: {w: 260, h: 60}, timelines: []}],
    },
    {
      name: "cta", guid: "L4", fileType: "text", className: "ctaCopy",
      shots: [{index: 0, pos: {x: 50, y: 500}, size: {w: 200, h: 50},
               timelines: [{id: "t4", trigger: "g3",
                            steps: [{settings: {animationType: "from", delay: "0", duration: "0.6", opacity: 0}}]}]}],
    },
  ],
};
"""

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <link rel="stylesheet" href="style.css">
  <script src="https://cdn.example.com/gsap.min.js"></script>
  <script src="manifest.js"></script>
  <script src="./grid8player.js"></script>
</head>
<body>
  <div id="ad" style="background-image: url('./bg.jpg')"></div>
  <script>
    var dynamicData = {};
    grid8player.dynamicData = dynamicData;
  </script>
</body>
</html>
"""


@pytest.fixture
def manifest_js():
    return SAMPLE_MANIFEST_JS


@pytest.fixture
def manifest(manifest_js):
    from admanifest.manifest import parse_manifest

    return parse_manifest(manifest_js)


@pytest.fixture
def index_html():
    return SAMPLE_HTML


@pytest.fixture
def template_dir(tmp_path):
    """A template folder with two sizes, each holding manifest.js + index.html."""
    root = tmp_path / "template000"
    for size in ("300x600", "300x250"):
        size_dir = root / size
        size_dir.mkdir(parents=True)
        (size_dir / "manifest.js").write_text(SAMPLE_MANIFEST_JS, encoding="utf-8")
        (size_dir / "index.html").write_text(SAMPLE_HTML, encoding="utf-8")
    return root
