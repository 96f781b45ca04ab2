"""
Near-field binaural rendering tools.
"""
