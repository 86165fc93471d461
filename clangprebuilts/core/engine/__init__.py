"""Engine — module instances, load hooks and the clang prebuilt module types."""
