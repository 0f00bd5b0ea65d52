# This file makes the routes directory a Python package
