"""Line handling for the lcparse executable: sessions, the interactive shell, and error reporting."""
