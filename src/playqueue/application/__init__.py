"""
Application Layer

Orchestrates the queue aggregate, its persistence, and the preprocessor
pipeline to fulfil the resource operations.

Structure:
- services/: the Queue Store and the Resolution Gate
- interfaces/: port interfaces implemented by preprocessors
"""
