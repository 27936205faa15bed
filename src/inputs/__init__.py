"""Input adapters (keyboard)"""
