"""Input handling components."""
from .bezier_movement import BezierPath, Point, control_points_in_bbox, cubic_bezier, sample_bezier_path
from .motion import HumanLikeMotion, StraightMotion, create_motion
