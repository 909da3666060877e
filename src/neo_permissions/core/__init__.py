"""Core domain of neo-permissions: value objects, exceptions, events and protocols."""
