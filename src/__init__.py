# Photo Archive Auditor
# A Python tool to validate file names and provenance metadata of processed RAW images

from .models import (
    RawExtension, ProcessedExtension, FileType, ViolationKind, ParsedFilename,
    MetadataRecord, Pass, Violation, CorrectionNeeded, BatchReport, AuditSummary
)
from .exceptions import (
    ProcessingError, ValidationError, ExifReadError, ExifWriteError,
    NamingViolationError, UnexpectedFileTypeError, InvalidFileNameFormatError,
    MissingHDRSuffixError, MissingPanoSuffixError, MissingEditMarkerError,
    BatchAbortedError
)
from .pattern_registry import OriginPattern, SequencePattern, PatternRegistry, create_default_registry
from .filename_parser import FilenameParser
from .checker import ConsistencyChecker
from .metadata_provider import MetadataProvider, MetadataWriter
from .exif_tool import ExifToolClient
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .archive_validator import ArchiveValidator, AuditConfig

__all__ = [
    'RawExtension',
    'ProcessedExtension',
    'FileType',
    'ViolationKind',
    'ParsedFilename',
    'MetadataRecord',
    'Pass',
    'Violation',
    'CorrectionNeeded',
    'BatchReport',
    'AuditSummary',
    'ProcessingError',
    'ValidationError',
    'ExifReadError',
    'ExifWriteError',
    'NamingViolationError',
    'UnexpectedFileTypeError',
    'InvalidFileNameFormatError',
    'MissingHDRSuffixError',
    'MissingPanoSuffixError',
    'MissingEditMarkerError',
    'BatchAbortedError',
    'OriginPattern',
    'SequencePattern',
    'PatternRegistry',
    'create_default_registry',
    'FilenameParser',
    'ConsistencyChecker',
    'MetadataProvider',
    'MetadataWriter',
    'ExifToolClient',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'ArchiveValidator',
    'AuditConfig'
]
