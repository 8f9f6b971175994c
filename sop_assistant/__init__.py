"""SOP Assistant: retrieval-augmented chat over Standard Operating Procedures."""
