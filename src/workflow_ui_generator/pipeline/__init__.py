"""Generation pipeline: extraction, preview, assembly, packaging and publishing."""
