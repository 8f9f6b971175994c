"""
SOP chat module.

Retrieval-augmented question answering over the team's SOPs: prompt
composition, schema-constrained generation and response classification.
"""
