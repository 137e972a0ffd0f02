"""
Front-ends that drive the engine.

Modules:
    cli: Terminal game against the engine
"""
