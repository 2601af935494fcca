"""
conceptmapper.config.defaults - Default configuration values
"""

CONFIG_FILENAME = ".conceptmapper.toml"

DEFAULT_CONFIG = {
    "export": {
        # Log file used when --log is not given
        "log": "concept_map_log.csv",
        "screenshot_dir": "ConceptMapperScreenshots",
        "snapshot_suffix": "_nodes",
    },
    "images": {
        "extensions": [".png"],
    },
    "canvas": {
        # Hit-test radius for clicks on existing nodes, in canvas pixels
        "hit_radius": 40,
    },
    "logging": {
        "level": "WARNING",
    },
}
