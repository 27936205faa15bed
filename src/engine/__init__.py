"""
Performance engine

Layer frame loops, background transitions, overlay effects and the
auto-advance timer. All timing goes through an injectable Clock.
"""
