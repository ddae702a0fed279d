"""MyNotes: постраничный слой доступа к заметкам"""

__version__ = "1.0.0"
