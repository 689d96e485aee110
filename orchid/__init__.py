"""Django project package for the Orchid admin panel."""
