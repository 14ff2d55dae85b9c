"""Appeal communications: multi-channel donor notifications with batch audit history."""
