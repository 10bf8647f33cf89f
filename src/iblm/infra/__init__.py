"""Infrastructure implementations for iblm."""
