"""
depthai pipeline assembly for spatial object detection.

Wires a colour camera, two mono cameras and stereo depth into a
SpatialDetectionNetwork and exposes its passthrough frames and detections
as a DepthAISource. Written for the OAK-D series 2 camera layout.
"""

from __future__ import annotations

import logging

import depthai as dai

from models.config import Config
from observation.depthai_source import DepthAISource
from .spatial import parse_spatial_algorithm

COLOR_SOCKET = dai.CameraBoardSocket.CAM_A
LEFT_SOCKET = dai.CameraBoardSocket.CAM_B
RIGHT_SOCKET = dai.CameraBoardSocket.CAM_C


def build_pipeline(config: Config) -> DepthAISource:
    """
    Build (but do not start) the device pipeline.

    Args:
        config: Application configuration.

    Returns:
        DepthAISource reading from the spatial detection network. Starting
        the source starts the pipeline.
    """
    width, height = config.camera.width, config.camera.height
    output_size = (width, height)

    pipeline = dai.Pipeline()
    color_cam = pipeline.create(dai.node.Camera).build(COLOR_SOCKET)
    left_cam = pipeline.create(dai.node.Camera).build(LEFT_SOCKET)
    right_cam = pipeline.create(dai.node.Camera).build(RIGHT_SOCKET)

    stereo = pipeline.create(dai.node.StereoDepth)
    stereo.setOutputSize(width, height)
    # Needed for short range objects
    stereo.setExtendedDisparity(config.camera.extended_disparity)
    left_cam.requestOutput(output_size).link(stereo.left)
    right_cam.requestOutput(output_size).link(stereo.right)

    # Downloaded from the model zoo onto the device
    model_desc = dai.NNModelDescription()
    model_desc.model = config.model.name

    spatial = config.spatial
    sdn = pipeline.create(dai.node.SpatialDetectionNetwork)
    # Older frames are pushed out of a full queue instead of freezing
    sdn.input.setBlocking(False)
    # Shrinking the box removes background from the depth sample
    sdn.setBoundingBoxScaleFactor(spatial.box_scale)
    sdn.setDepthLowerThreshold(spatial.lower_threshold)
    sdn.setDepthUpperThreshold(spatial.upper_threshold)
    sdn.setSpatialCalculationStepSize(spatial.step_size)
    algorithm = parse_spatial_algorithm(spatial.algorithm)
    sdn.setSpatialCalculationAlgorithm(getattr(dai.SpatialLocationCalculatorAlgorithm, algorithm))
    sdn.build(color_cam, stereo, model_desc, fps=config.camera.fps)

    if config.model.labels is not None:
        label_map = list(config.model.labels)
    else:
        label_map = list(sdn.getClasses() or [])
    if not label_map:
        logging.warning("Model provides no class labels; class indices will be shown instead")

    logging.info(
        f"Pipeline built: model={config.model.name}, size={width}x{height}, "
        f"fps={config.camera.fps}, algorithm={algorithm}, "
        f"depth=[{spatial.lower_threshold}, {spatial.upper_threshold}]mm"
    )

    return DepthAISource(
        pipeline=pipeline,
        frame_queue=sdn.passthrough.createOutputQueue(),
        detection_queue=sdn.out.createOutputQueue(),
        label_map=label_map,
    )
