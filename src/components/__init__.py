from .cameras import ARCamera, ARFaceTrackingCamera, ARImageTrackingCamera, ARSLAMCamera, ARVPSCamera

__all__ = [
    "ARCamera",
    "ARSLAMCamera",
    "ARFaceTrackingCamera",
    "ARImageTrackingCamera",
    "ARVPSCamera",
]
