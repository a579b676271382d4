import pyglet

# tests never open a window; without this, importing pyglet.window creates a
# hidden shadow GL window and fails on machines without a display
pyglet.options["shadow_window"] = False
