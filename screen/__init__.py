"""Declarative screen layouts for the admin panel.

Layouts are plain Python classes that describe a table or chart. At render
time they receive a read-only `Repository` and produce a `LayoutView` that a
Django template turns into markup.
"""
