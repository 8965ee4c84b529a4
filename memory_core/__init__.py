"""
Memory-match core Python package.

This package holds the game state machine and its helpers, kept apart from
the Flask app and the terminal player so the rules stay easy to test.
Modules:
- cards.py: Card, symbol catalog, deck dealing
- particles.py: BlastParticle and burst generation
- scheduler.py: one-shot delayed callbacks (virtual and monotonic clocks)
- state.py: GameState
- config.py: environment-driven settings
- cli.py: terminal player
"""
