from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str = "tetromino-catalog"
    rules_version: str = "1"


class StorageRules(BaseModel):
    data_file_name: str = "blocks.json"
    json_indent: int = Field(default=4, ge=0)


class UploadsRules(BaseModel):
    allowlist_mime_types: list[str] = [
        "image/png",
        "image/svg+xml",
        "image/jpeg",
        "image/gif",
    ]
    public_prefix: str = "images"  # prefix stored in the record's image field


class CorsRules(BaseModel):
    allow_origins: list[str] = ["*"]
    allow_methods: list[str] = ["GET", "POST", "OPTIONS"]
    allow_headers: list[str] = ["Content-Type"]


class Rules(BaseModel):
    project: ProjectRules = ProjectRules()
    storage: StorageRules = StorageRules()
    uploads: UploadsRules = UploadsRules()
    cors: CorsRules = CorsRules()
