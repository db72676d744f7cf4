"""File-based storage for resource directories, JSON templates, and settings.

Data layout (resource mode):
  <data_dir>/
    _meta.json             Category tree (schemaVersion, resourceType, categories)
    <category>/
      <resource>/
        manifest.json      Resource descriptor (id, name, order, enabled, ...)
        *.md, *.json ...   Content files edited by the manager
    imported/              Staging folder filled by import_resources()

Data layout (JSON-template mode):
  <data_dir>/
    <categoryKey>.json     {key, name, icon, order, templates: [...]}

Every function takes the directory it works on as an argument; nothing here
holds a current data directory. The resource path (or "key::id" for JSON
templates) returned by a scan is what callers pass back to mutate or delete.

Error policy: listings (scan, reindex, category listing) skip unreadable
items and log them; mutations raise StorageError and stop the surrounding
batch. Missing optional files (_meta.json, AI config, service lists) mean
"use defaults".
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    DataDirState,
    StorageError,
    now_iso,
    read_json,
    write_json,
)

from .manifests import (  # noqa: F401
    MANIFEST_FILE,
    batch_delete_resources,
    batch_move_category,
    batch_set_enabled,
    create_resource,
    delete_resource,
    read_manifest,
    reorder_resources,
    save_manifest,
)

from .scanner import (  # noqa: F401
    reindex_all_orders,
    scan_resources,
)

from .content import (  # noqa: F401
    read_content_file,
    save_content_file,
)

from .meta import (  # noqa: F401
    META_FILE,
    read_meta,
    save_meta,
)

from .json_templates import (  # noqa: F401
    DEFAULT_CATEGORY_ICON,
    batch_delete_json_templates,
    create_json_template,
    delete_json_template,
    move_json_template,
    read_json_categories,
    read_json_template,
    reorder_json_templates,
    save_json_category,
    save_json_template,
    scan_json_resources,
    split_template_path,
    template_path,
)

from .archive import (  # noqa: F401
    IMPORT_DIR,
    export_resources,
    import_resources,
)

from .ai_config import (  # noqa: F401
    active_service_config,
    default_config_dir,
    load_ai_config,
    load_local_ai_services,
    load_shared_ai_services,
    save_ai_config,
    save_local_ai_services,
)
