SERVICE_NAME = "dogpatch"
