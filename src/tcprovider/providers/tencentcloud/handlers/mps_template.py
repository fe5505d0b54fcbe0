"""Handlers for MPS transcode and watermark templates."""
from typing import Any, Dict, Optional

from tcprovider.domain.resource import Field, FieldType, ResourceData, Schema
from tcprovider.providers.tencentcloud.handlers.base_handler import SchemaMappedResourceHandler
from tcprovider.providers.tencentcloud.services import MpsService

VIDEO_TEMPLATE_SCHEMA = Schema({
    "codec": Field(FieldType.STRING, required=True, api_name="Codec"),
    "fps": Field(FieldType.INT, required=True, api_name="Fps"),
    "bitrate": Field(FieldType.INT, required=True, api_name="Bitrate"),
    "resolution_adaptive": Field(FieldType.STRING, optional=True, api_name="ResolutionAdaptive"),
    "width": Field(FieldType.INT, optional=True, api_name="Width"),
    "height": Field(FieldType.INT, optional=True, api_name="Height"),
    "gop": Field(FieldType.INT, optional=True, api_name="Gop"),
    "fill_type": Field(FieldType.STRING, optional=True, api_name="FillType"),
    "vcrf": Field(FieldType.INT, optional=True, api_name="Vcrf"),
})

AUDIO_TEMPLATE_SCHEMA = Schema({
    "codec": Field(FieldType.STRING, required=True, api_name="Codec"),
    "bitrate": Field(FieldType.INT, required=True, api_name="Bitrate"),
    "sample_rate": Field(FieldType.INT, required=True, api_name="SampleRate"),
    "audio_channel": Field(FieldType.INT, optional=True, api_name="AudioChannel"),
})

TEHD_CONFIG_SCHEMA = Schema({
    "type": Field(FieldType.STRING, required=True, api_name="Type"),
    "max_video_bitrate": Field(FieldType.INT, optional=True, api_name="MaxVideoBitrate"),
})

IMAGE_TEMPLATE_SCHEMA = Schema({
    "image_content": Field(FieldType.STRING, required=True, api_name="ImageContent",
                           description="Base64 encoded watermark image; not returned by reads."),
    "width": Field(FieldType.STRING, optional=True, api_name="Width"),
    "height": Field(FieldType.STRING, optional=True, api_name="Height"),
    "repeat_type": Field(FieldType.STRING, optional=True, api_name="RepeatType"),
})

TEXT_TEMPLATE_SCHEMA = Schema({
    "font_type": Field(FieldType.STRING, required=True, api_name="FontType"),
    "font_size": Field(FieldType.STRING, required=True, api_name="FontSize"),
    "font_color": Field(FieldType.STRING, optional=True, api_name="FontColor"),
    "font_alpha": Field(FieldType.FLOAT, optional=True, api_name="FontAlpha"),
})

SVG_TEMPLATE_SCHEMA = Schema({
    "width": Field(FieldType.STRING, optional=True, api_name="Width"),
    "height": Field(FieldType.STRING, optional=True, api_name="Height"),
})


class MpsTranscodeTemplateHandler(SchemaMappedResourceHandler):
    """Custom transcoding template, identified by its definition number."""

    type_name = "tencentcloud_mps_transcode_template"
    schema = Schema({
        "container": Field(FieldType.STRING, required=True, api_name="Container",
                           description="Container format such as mp4, flv, hls or mp3."),
        "name": Field(FieldType.STRING, optional=True, api_name="Name"),
        "comment": Field(FieldType.STRING, optional=True, api_name="Comment"),
        "remove_video": Field(FieldType.INT, optional=True, api_name="RemoveVideo"),
        "remove_audio": Field(FieldType.INT, optional=True, api_name="RemoveAudio"),
        "video_template": Field(FieldType.BLOCK, optional=True, api_name="VideoTemplate",
                                elem=VIDEO_TEMPLATE_SCHEMA),
        "audio_template": Field(FieldType.BLOCK, optional=True, api_name="AudioTemplate",
                                elem=AUDIO_TEMPLATE_SCHEMA),
        "tehd_config": Field(FieldType.BLOCK, optional=True, api_name="TEHDConfig",
                             elem=TEHD_CONFIG_SCHEMA),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MpsService(client, rate_limiter)

    def _create_remote(self, params: Dict[str, Any]) -> int:
        return self._service.create_transcode_template(params)

    def _describe_remote(self, resource_id: str) -> Optional[Dict[str, Any]]:
        return self._service.describe_mps_transcode_template_by_id(resource_id)

    def _modify_remote(self, data: ResourceData, params: Dict[str, Any]) -> None:
        self._service.modify_transcode_template(dict(params, Definition=int(data.id)))

    def _delete_remote(self, data: ResourceData) -> None:
        self._service.delete_mps_transcode_template_by_id(data.id)


class MpsWatermarkTemplateHandler(SchemaMappedResourceHandler):
    """Image, text or SVG watermark template."""

    type_name = "tencentcloud_mps_watermark_template"
    schema = Schema({
        "type": Field(FieldType.STRING, required=True, force_new=True, api_name="Type",
                      description="Watermark type: image, text or svg."),
        "name": Field(FieldType.STRING, optional=True, api_name="Name"),
        "comment": Field(FieldType.STRING, optional=True, api_name="Comment"),
        "coordinate_origin": Field(FieldType.STRING, optional=True, api_name="CoordinateOrigin"),
        "x_pos": Field(FieldType.STRING, optional=True, api_name="XPos"),
        "y_pos": Field(FieldType.STRING, optional=True, api_name="YPos"),
        "image_template": Field(FieldType.BLOCK, optional=True, api_name="ImageTemplate",
                                elem=IMAGE_TEMPLATE_SCHEMA),
        "text_template": Field(FieldType.BLOCK, optional=True, api_name="TextTemplate",
                               elem=TEXT_TEMPLATE_SCHEMA),
        "svg_template": Field(FieldType.BLOCK, optional=True, api_name="SvgTemplate",
                              elem=SVG_TEMPLATE_SCHEMA),
    })

    def __init__(self, client, rate_limiter, retry_config=None, **kwargs):
        super().__init__(client, rate_limiter, retry_config, **kwargs)
        self._service = MpsService(client, rate_limiter)

    def read(self, data: ResourceData) -> None:
        # image_content is write-only remotely; carry the known value across the refresh.
        prior_image = data.get("image_template") or {}
        super().read(data)
        image = data.get("image_template")
        if isinstance(image, dict) and "image_content" in prior_image:
            data.set("image_template", dict(image, image_content=prior_image["image_content"]))

    def _create_remote(self, params: Dict[str, Any]) -> int:
        return self._service.create_watermark_template(params)

    def _describe_remote(self, resource_id: str) -> Optional[Dict[str, Any]]:
        return self._service.describe_mps_watermark_template_by_id(resource_id)

    def _modify_remote(self, data: ResourceData, params: Dict[str, Any]) -> None:
        self._service.modify_watermark_template(dict(params, Definition=int(data.id)))

    def _delete_remote(self, data: ResourceData) -> None:
        self._service.delete_mps_watermark_template_by_id(data.id)
