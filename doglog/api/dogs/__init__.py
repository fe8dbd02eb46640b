# doglog/api/dogs/__init__.py
