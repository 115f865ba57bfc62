"""asmigrate: default App Service migration settings for packaged IIS sites."""

__version__ = "0.1.0"
