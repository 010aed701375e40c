"""Speech synthesis service: dispatcher drivers and script stitching."""
