"""AssetHub - uniform blob storage across cloud buckets, MinIO and local directories."""
