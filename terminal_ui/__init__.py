"""Line-prompt terminal front end for the casino."""
