"""Tests for TencentCloud resource and data source handlers."""
import json

import pytest
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException

from tcprovider.domain.core.exceptions import ValidationError
from tcprovider.domain.resource import ResourceData
from tcprovider.infrastructure.exceptions import AsyncTaskFailedError, RetryTimeoutError
from tcprovider.providers.tencentcloud.handlers import (
    AsExecuteScalingPolicyHandler,
    MariadbUpgradePriceDataSource,
    MpsEnableWorkflowHandler,
    MpsTranscodeTemplateHandler,
    MpsWatermarkTemplateHandler,
    MpsWorkflowHandler,
    MysqlDrInstanceToMasterHandler,
    MysqlSwitchProxyHandler,
    VpcLocalGatewayHandler,
)


def new_data(handler, config):
    return ResourceData(handler.schema, config, type_name=handler.type_name)


def existing_data(handler, resource_id, state, config=None):
    return ResourceData(handler.schema, config, state, resource_id, handler.type_name)


@pytest.mark.unit
class TestAsExecuteScalingPolicyHandler:
    """Test one-shot scaling policy execution."""

    def test_create_sends_explicit_false_honor_cooldown(self, handler_factory, fake_api):
        handler = handler_factory(AsExecuteScalingPolicyHandler)
        fake_api.reply("ExecuteScalingPolicy", {"ActivityId": "asa-1"})
        data = new_data(handler, {"auto_scaling_policy_id": "asp-1", "honor_cooldown": False,
                                  "trigger_source": "API"})

        handler.create(data)

        assert data.id == "asa-1"
        assert fake_api.params("ExecuteScalingPolicy") == {
            "AutoScalingPolicyId": "asp-1", "HonorCooldown": False, "TriggerSource": "API",
        }
        assert fake_api.actions() == ["ExecuteScalingPolicy"]

    def test_create_omits_unset_optional_fields(self, handler_factory, fake_api):
        handler = handler_factory(AsExecuteScalingPolicyHandler)
        fake_api.reply("ExecuteScalingPolicy", {"ActivityId": "asa-1"})

        handler.create(new_data(handler, {"auto_scaling_policy_id": "asp-1"}))

        assert fake_api.params("ExecuteScalingPolicy") == {"AutoScalingPolicyId": "asp-1"}

    def test_create_retries_throttling(self, handler_factory, fake_api, clock):
        handler = handler_factory(AsExecuteScalingPolicyHandler)
        fake_api.reply(
            "ExecuteScalingPolicy",
            TencentCloudSDKException("RequestLimitExceeded", "slow down", "req-1"),
            {"ActivityId": "asa-1"},
        )
        data = new_data(handler, {"auto_scaling_policy_id": "asp-1"})

        handler.create(data)

        assert data.id == "asa-1"
        assert clock.sleeps == [0.5]

    def test_write_gives_up_after_write_budget(self, handler_factory, fake_api):
        handler = handler_factory(AsExecuteScalingPolicyHandler)
        fake_api.reply("ExecuteScalingPolicy", TencentCloudSDKException("ResourceInUse", "busy", "req-1"))

        with pytest.raises(RetryTimeoutError) as exc_info:
            handler.create(new_data(handler, {"auto_scaling_policy_id": "asp-1"}))

        assert exc_info.value.timeout == 300

    def test_read_and_delete_make_no_calls(self, handler_factory, fake_api):
        handler = handler_factory(AsExecuteScalingPolicyHandler)
        data = existing_data(handler, "asa-1", {"auto_scaling_policy_id": "asp-1"})

        handler.read(data)
        handler.delete(data)

        assert data.id == "asa-1"
        assert fake_api.calls == []
        assert not handler.supports_update


@pytest.mark.unit
class TestMysqlDrInstanceToMasterHandler:
    """Test DR promotion and the async wait."""

    def test_create_waits_for_success(self, handler_factory, fake_api, clock):
        handler = handler_factory(MysqlDrInstanceToMasterHandler)
        fake_api.reply("SwitchDrInstanceToMaster", {"AsyncRequestId": "req-async"})
        fake_api.reply(
            "DescribeAsyncRequestInfo",
            {"Status": "RUNNING"}, {"Status": "RUNNING"}, {"Status": "SUCCESS", "Info": ""},
        )
        fake_api.reply("DescribeDBInstances", {"Items": [{"InstanceId": "cdb-1"}]})
        data = new_data(handler, {"instance_id": "cdb-1"})

        handler.create(data)

        assert data.id == "cdb-1"
        assert fake_api.actions() == [
            "SwitchDrInstanceToMaster",
            "DescribeAsyncRequestInfo",
            "DescribeAsyncRequestInfo",
            "DescribeAsyncRequestInfo",
            "DescribeDBInstances",
        ]
        assert fake_api.params("DescribeAsyncRequestInfo") == {"AsyncRequestId": "req-async"}
        assert clock.sleeps == [0.5, 1.0]

    def test_failed_switch_reports_remote_message(self, handler_factory, fake_api):
        handler = handler_factory(MysqlDrInstanceToMasterHandler)
        fake_api.reply("SwitchDrInstanceToMaster", {"AsyncRequestId": "req-async"})
        fake_api.reply("DescribeAsyncRequestInfo", {"Status": "FAILED", "Info": "not a DR instance"})

        with pytest.raises(AsyncTaskFailedError) as exc_info:
            handler.create(new_data(handler, {"instance_id": "cdb-1"}))

        assert str(exc_info.value) == (
            "cdb-1 update mysql drInstanceToMater status is FAILED, "
            "we won't wait for it finish, it show message:not a DR instance"
        )
        assert "DescribeDBInstances" not in fake_api.actions()

    def test_read_missing_instance_clears_id(self, handler_factory, fake_api):
        handler = handler_factory(MysqlDrInstanceToMasterHandler)
        fake_api.reply("DescribeDBInstances", {"Items": []})
        data = existing_data(handler, "cdb-1", {"instance_id": "cdb-1"})

        handler.read(data)

        assert data.id == ""

    def test_delete_makes_no_calls(self, handler_factory, fake_api):
        handler = handler_factory(MysqlDrInstanceToMasterHandler)

        handler.delete(existing_data(handler, "cdb-1", {"instance_id": "cdb-1"}))

        assert fake_api.calls == []


@pytest.mark.unit
class TestMysqlSwitchProxyHandler:
    """Test proxy switching and its composite identifier."""

    def test_create_joins_identifier(self, handler_factory, fake_api):
        handler = handler_factory(MysqlSwitchProxyHandler)
        fake_api.reply("SwitchCDBProxy", {})
        data = new_data(handler, {"instance_id": "cdb-1", "proxy_group_id": "proxy-1"})

        handler.create(data)

        assert data.id == "cdb-1#proxy-1"
        assert fake_api.params("SwitchCDBProxy") == {"InstanceId": "cdb-1", "ProxyGroupId": "proxy-1"}

    def test_import_splits_identifier(self, handler_factory):
        handler = handler_factory(MysqlSwitchProxyHandler)
        data = existing_data(handler, "cdb-1#proxy-1", {})

        [imported] = handler.importer(data)

        assert imported.get("instance_id") == "cdb-1"
        assert imported.get("proxy_group_id") == "proxy-1"

    def test_import_rejects_malformed_identifier(self, handler_factory):
        handler = handler_factory(MysqlSwitchProxyHandler)

        with pytest.raises(ValidationError):
            handler.importer(existing_data(handler, "cdb-1", {}))


GATEWAY = {
    "UniqLocalGwId": "lgw-1",
    "LocalGatewayName": "gw",
    "VpcId": "vpc-1",
    "CdcId": "cluster-1",
    "CreateTime": "2023-01-01 00:00:00",
}


@pytest.mark.unit
class TestVpcLocalGatewayHandler:
    """Test local gateway CRUD."""

    def test_create(self, handler_factory, fake_api):
        handler = handler_factory(VpcLocalGatewayHandler)
        fake_api.reply("CreateLocalGateway", {"LocalGateway": GATEWAY})
        fake_api.reply("DescribeLocalGateway", {"LocalGatewaySet": [GATEWAY], "TotalCount": 1})
        data = new_data(handler, {"local_gateway_name": "gw", "vpc_id": "vpc-1", "cdc_id": "cluster-1"})

        handler.create(data)

        assert data.id == "lgw-1"
        assert fake_api.params("CreateLocalGateway") == {
            "LocalGatewayName": "gw", "VpcId": "vpc-1", "CdcId": "cluster-1",
        }
        assert data.to_dict() == {"id": "lgw-1", "local_gateway_name": "gw",
                                  "vpc_id": "vpc-1", "cdc_id": "cluster-1"}

    def test_read_prefers_unique_vpc_id(self, handler_factory, fake_api):
        handler = handler_factory(VpcLocalGatewayHandler)
        fake_api.reply("DescribeLocalGateway", {"LocalGatewaySet": [dict(GATEWAY, UniqVpcId="vpc-uniq")]})
        data = existing_data(handler, "lgw-1", {"local_gateway_name": "gw"})

        handler.read(data)

        assert data.get("vpc_id") == "vpc-uniq"
        assert data.get("cdc_id") == "cluster-1"

    def test_update_sends_full_identity(self, handler_factory, fake_api):
        handler = handler_factory(VpcLocalGatewayHandler)
        fake_api.reply("ModifyLocalGateway", {})
        fake_api.reply("DescribeLocalGateway", {"LocalGatewaySet": [dict(GATEWAY, LocalGatewayName="gw2")]})
        state = {"local_gateway_name": "gw", "vpc_id": "vpc-1", "cdc_id": "cluster-1"}
        data = existing_data(handler, "lgw-1", state, dict(state, local_gateway_name="gw2"))

        handler.update(data)

        assert fake_api.params("ModifyLocalGateway") == {
            "LocalGatewayId": "lgw-1", "LocalGatewayName": "gw2", "CdcId": "cluster-1", "VpcId": "vpc-1",
        }
        assert data.get("local_gateway_name") == "gw2"

    def test_delete(self, handler_factory, fake_api):
        handler = handler_factory(VpcLocalGatewayHandler)
        fake_api.reply("DeleteLocalGateway", {})

        handler.delete(existing_data(handler, "lgw-1", {"local_gateway_name": "gw", "vpc_id": "vpc-1",
                                                        "cdc_id": "cluster-1"}))

        assert fake_api.params("DeleteLocalGateway") == {
            "LocalGatewayId": "lgw-1", "CdcId": "cluster-1", "VpcId": "vpc-1",
        }

    def test_read_missing_gateway_clears_id(self, handler_factory, fake_api):
        handler = handler_factory(VpcLocalGatewayHandler)
        fake_api.reply("DescribeLocalGateway", {"LocalGatewaySet": [], "TotalCount": 0})
        data = existing_data(handler, "lgw-1", {"local_gateway_name": "gw"})

        handler.read(data)

        assert data.id == ""


WORKFLOW_CONFIG = {
    "workflow_name": "transcode-uploads",
    "trigger": {
        "type": "CosFileUpload",
        "cos_file_upload_trigger": {"bucket": "media-1250000000", "region": "ap-guangzhou",
                                    "dir": "/upload/", "formats": ["mp4"]},
    },
    "output_dir": "/output/",
    "media_process_task": {"TranscodeTaskSet": [{"Definition": 100010}]},
}

WORKFLOW_INFO = {
    "WorkflowId": 42,
    "WorkflowName": "transcode-uploads",
    "Status": "Disabled",
    "Trigger": {
        "Type": "CosFileUpload",
        "CosFileUploadTrigger": {"Bucket": "media-1250000000", "Region": "ap-guangzhou",
                                 "Dir": "/upload/", "Formats": ["mp4"]},
    },
    "OutputDir": "/output/",
    "MediaProcessTask": {"TranscodeTaskSet": [{"Definition": 100010, "WatermarkSet": None}]},
}


@pytest.mark.unit
class TestMpsWorkflowHandler:
    """Test workflow CRUD through the schema mapping."""

    def test_create_maps_nested_blocks(self, handler_factory, fake_api):
        handler = handler_factory(MpsWorkflowHandler)
        fake_api.reply("CreateWorkflow", {"WorkflowId": 42})
        fake_api.reply("DescribeWorkflows", {"WorkflowInfoSet": [WORKFLOW_INFO]})
        data = new_data(handler, WORKFLOW_CONFIG)

        handler.create(data)

        assert data.id == "42"
        assert fake_api.params("CreateWorkflow") == {
            "WorkflowName": "transcode-uploads",
            "Trigger": {
                "Type": "CosFileUpload",
                "CosFileUploadTrigger": {"Bucket": "media-1250000000", "Region": "ap-guangzhou",
                                         "Dir": "/upload/", "Formats": ["mp4"]},
            },
            "OutputDir": "/output/",
            "MediaProcessTask": {"TranscodeTaskSet": [{"Definition": 100010}]},
        }
        assert data.get("status") == "Disabled"
        assert data.get("media_process_task") == WORKFLOW_CONFIG["media_process_task"]

    def test_update_sends_only_changed_fields(self, handler_factory, fake_api):
        handler = handler_factory(MpsWorkflowHandler)
        fake_api.reply("ModifyWorkflow", {})
        fake_api.reply("DescribeWorkflows", {"WorkflowInfoSet": [dict(WORKFLOW_INFO, WorkflowName="renamed")]})
        data = existing_data(handler, "42", WORKFLOW_CONFIG, dict(WORKFLOW_CONFIG, workflow_name="renamed"))

        handler.update(data)

        assert fake_api.params("ModifyWorkflow") == {"WorkflowId": 42, "WorkflowName": "renamed"}
        assert data.get("workflow_name") == "renamed"

    def test_delete(self, handler_factory, fake_api):
        handler = handler_factory(MpsWorkflowHandler)
        fake_api.reply("DeleteWorkflow", {})

        handler.delete(existing_data(handler, "42", WORKFLOW_CONFIG))

        assert fake_api.params("DeleteWorkflow") == {"WorkflowId": 42}


@pytest.mark.unit
class TestMpsEnableWorkflowHandler:
    """Test toggling a workflow."""

    def test_create_enables(self, handler_factory, fake_api):
        handler = handler_factory(MpsEnableWorkflowHandler)
        fake_api.reply("EnableWorkflow", {})
        fake_api.reply("DescribeWorkflows", {"WorkflowInfoSet": [dict(WORKFLOW_INFO, Status="Enabled")]})
        data = new_data(handler, {"workflow_id": 42, "enabled": True})

        handler.create(data)

        assert data.id == "42"
        assert fake_api.params("EnableWorkflow") == {"WorkflowId": 42}
        assert data.get("enabled") is True

    def test_update_disables(self, handler_factory, fake_api):
        handler = handler_factory(MpsEnableWorkflowHandler)
        fake_api.reply("DisableWorkflow", {})
        fake_api.reply("DescribeWorkflows", {"WorkflowInfoSet": [WORKFLOW_INFO]})
        data = existing_data(handler, "42", {"workflow_id": 42, "enabled": True},
                             {"workflow_id": 42, "enabled": False})

        handler.update(data)

        assert fake_api.actions() == ["DisableWorkflow", "DescribeWorkflows"]
        assert data.get("enabled") is False

    def test_read_missing_workflow_clears_id(self, handler_factory, fake_api):
        handler = handler_factory(MpsEnableWorkflowHandler)
        fake_api.reply("DescribeWorkflows", {"WorkflowInfoSet": []})
        data = existing_data(handler, "42", {"workflow_id": 42, "enabled": True})

        handler.read(data)

        assert data.id == ""


@pytest.mark.unit
class TestMpsTemplateHandlers:
    """Test transcode and watermark templates."""

    def test_transcode_template_create_and_update(self, handler_factory, fake_api):
        handler = handler_factory(MpsTranscodeTemplateHandler)
        remote = {
            "Definition": 1001, "Container": "mp4", "Name": "hd", "RemoveAudio": 0,
            "VideoTemplate": {"Codec": "libx264", "Fps": 25, "Bitrate": 2000, "Vcrf": 0},
        }
        config = {
            "container": "mp4", "name": "hd", "remove_audio": 0,
            "video_template": {"codec": "libx264", "fps": 25, "bitrate": 2000},
        }
        fake_api.reply("CreateTranscodeTemplate", {"Definition": 1001})
        fake_api.reply("DescribeTranscodeTemplates", {"TranscodeTemplateSet": [remote]})
        data = new_data(handler, config)

        handler.create(data)

        assert data.id == "1001"
        assert fake_api.params("CreateTranscodeTemplate")["VideoTemplate"] == {
            "Codec": "libx264", "Fps": 25, "Bitrate": 2000,
        }

        fake_api.reply("ModifyTranscodeTemplate", {})
        state = {k: v for k, v in data.to_dict().items() if k != "id"}
        update = existing_data(handler, "1001", state, dict(state, remove_audio=1))

        handler.update(update)

        assert fake_api.params("ModifyTranscodeTemplate") == {"Definition": 1001, "RemoveAudio": 1}

    def test_watermark_image_content_survives_read(self, handler_factory, fake_api):
        handler = handler_factory(MpsWatermarkTemplateHandler)
        fake_api.reply("DescribeWatermarkTemplates", {"WatermarkTemplateSet": [{
            "Definition": 2002, "Type": "image", "XPos": "10%",
            "ImageTemplate": {"ImageUrl": "https://example.com/wm.png", "Width": "10%", "RepeatType": "repeat"},
        }]})
        state = {"type": "image", "x_pos": "10%",
                 "image_template": {"image_content": "aGVsbG8=", "width": "10%"}}
        data = existing_data(handler, "2002", state)

        handler.read(data)

        assert data.get("image_template") == {
            "image_content": "aGVsbG8=", "width": "10%", "repeat_type": "repeat",
        }

    def test_watermark_delete(self, handler_factory, fake_api):
        handler = handler_factory(MpsWatermarkTemplateHandler)
        fake_api.reply("DeleteWatermarkTemplate", {})

        handler.delete(existing_data(handler, "2002", {"type": "image"}))

        assert fake_api.params("DeleteWatermarkTemplate") == {"Definition": 2002}


@pytest.mark.unit
class TestMariadbUpgradePriceDataSource:
    """Test the upgrade price lookup."""

    def test_read_populates_price_and_writes_output(self, handler_factory, fake_api, tmp_path):
        handler = handler_factory(MariadbUpgradePriceDataSource)
        output = tmp_path / "price.json"
        fake_api.reply("DescribeUpgradePrice", {"OriginalPrice": 1200, "Price": 1000, "Formula": "a*b"})
        data = new_data(handler, {"instance_id": "tdsql-1", "memory": 4, "storage": 100,
                                  "node_count": 0, "result_output_file": str(output)})

        handler.read(data)

        assert data.id == "tdsql-1"
        assert data.get("price") == 1000
        assert fake_api.params("DescribeUpgradePrice") == {
            "InstanceId": "tdsql-1", "Memory": 4, "Storage": 100, "NodeCount": 0,
        }
        assert json.loads(output.read_text()) == {
            "id": "tdsql-1", "instance_id": "tdsql-1", "memory": 4, "storage": 100, "node_count": 0,
            "original_price": 1200, "price": 1000, "formula": "a*b",
        }

    def test_read_sends_optional_parameters(self, handler_factory, fake_api):
        handler = handler_factory(MariadbUpgradePriceDataSource)
        fake_api.reply("DescribeUpgradePrice", {"OriginalPrice": 0, "Price": 0, "Formula": ""})
        data = new_data(handler, {"instance_id": "tdsql-1", "memory": 8, "storage": 200,
                                  "node_count": 3, "amount_unit": "microPent"})

        handler.read(data)

        params = fake_api.params("DescribeUpgradePrice")
        assert params["NodeCount"] == 3
        assert params["AmountUnit"] == "microPent"
        assert data.get("original_price") == 0
