"""
Trajectory, curvature and RMSD analysis of 3D-printed zig-zag soft pneumatic
actuators (Dragon Skin only vs Dragon Skin + Ecoflex).
"""
