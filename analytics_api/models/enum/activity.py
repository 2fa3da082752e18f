from enum import StrEnum


class ActivityObject(StrEnum):
    dataset = "dataset"


class ActivitySubject(StrEnum):
    dataset_share = "dataset_share"
    dataload_execute = "dataload_execute"
