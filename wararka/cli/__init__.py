# wararka/cli/__init__.py
