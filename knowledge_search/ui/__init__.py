"""NiceGUI interface - thin visualization layer for research interactions.

Responsibilities:
    - Transcript display with sources, confidence and suggestions
    - Upload dialog for PDF documents
    - Document sidebar and knowledge base summary

Contains no business logic. Delegates all operations to the
ResearchAssistant and UploadPipeline.
"""
