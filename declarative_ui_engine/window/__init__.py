"""Gradio window host for the declarative UI engine.

Builds one gradio component per widget node and treats every gradio event
(a keystroke in a field, a button click) as one frame: the event is turned
into scripted input for a RecordingSurface, the engine renders the frame,
and the recorded draw calls are mapped back onto the components.

NOTE: gradio components are created once per launch. Reloading a config
updates texts and values; a reload that changes the widget layout is
refused until the window is restarted.
"""
