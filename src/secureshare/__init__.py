"""SecureShare: identity, sessions and transfer metadata for end-to-end encrypted file sharing."""

__version__ = "1.0.0"
