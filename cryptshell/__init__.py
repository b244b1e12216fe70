# CryptShell - run a shell inside a temporarily mounted gocryptfs store
from cryptshell.core.version import VERSION

__version__ = VERSION

__all__ = ["VERSION", "__version__"]
