"""
American checkers engine.

Modules:
    config: Dataclass configuration loaded from TOML
    core: Board model, move rules, evaluator and alpha-beta search
    analyzer: Move predictions, danger checks and move classification
    game: Side to move, status and move history for a single game
    main: Engine wrapper combining a game with a search engine
"""
