"""Test fixtures for NativeToolchains tests.

- toolkits: Fake Android NDK and osxcross install trees, isolated PathProbe

Import fixtures in your tests using:
    from tests.fixtures.toolkits import make_android_ndk
"""

__all__ = [
    "toolkits",
]
