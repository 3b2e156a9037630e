# Path: retriever/tests/__init__.py
