"""wp-plugin-scaffold: a WordPress plugin boilerplate generator."""

__version__ = "0.1.0"
