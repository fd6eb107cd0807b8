# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
MakerNote tag definitions

Static name tables for the vendor makernote directories, and the field
layouts of the makernotes that are not stored as IFDs (Kodak and the
Reconyx trail cameras). These tables are built once at import time and
never modified.

Copyright 2025 DNAi inc.
"""

from typing import NamedTuple, Optional

# Widths in bytes of the numeric fixed-field kinds
FIELD_WIDTHS = {
    'u8': 1,
    's8': 1,
    'u16': 2,
    's16': 2,
    'u32': 4,
}
TEXT_FIELD_KINDS = ('bytes', 'ascii', 'utf16le')


class FixedField(NamedTuple):
    """
    One field of a fixed-layout makernote.

    The tag id is the field's byte offset from the layout origin. For
    numeric kinds ``count`` is the number of components (more than one
    yields a list); for ``bytes``, ``ascii`` and ``utf16le`` it is the length
    in bytes. ``endian`` of None means the reader's current byte order.
    """
    tag: int
    name: str
    kind: str
    count: int = 1
    endian: Optional[str] = None

    @property
    def offset(self) -> int:
        return self.tag

    @property
    def byte_size(self) -> int:
        if self.kind in TEXT_FIELD_KINDS:
            return self.count
        return FIELD_WIDTHS[self.kind] * self.count


def _names(layout):
    return {field.tag: field.name for field in layout}


# ============================================================
# Fixed-layout makernotes
# ============================================================

# Offsets relative to makernote start + 8; byte order follows the "KDK INFO" header.
KODAK_LAYOUT = (
    FixedField(0, "KodakModel", 'ascii', 8),
    FixedField(9, "Quality", 'u8'),
    FixedField(10, "BurstMode", 'u8'),
    FixedField(12, "KodakImageWidth", 'u16'),
    FixedField(14, "KodakImageHeight", 'u16'),
    FixedField(16, "YearCreated", 'u16'),
    FixedField(18, "MonthDayCreated", 'bytes', 2),
    FixedField(20, "TimeCreated", 'bytes', 4),
    FixedField(24, "BurstMode2", 'u16'),
    FixedField(27, "ShutterMode", 'u8'),
    FixedField(28, "MeteringMode", 'u8'),
    FixedField(29, "SequenceNumber", 'u8'),
    FixedField(30, "FNumber", 'u16'),
    FixedField(32, "ExposureTime", 'u32'),
    FixedField(36, "ExposureCompensation", 's16'),
    FixedField(56, "FocusMode", 'u8'),
    FixedField(64, "WhiteBalance", 'u8'),
    FixedField(92, "FlashMode", 'u8'),
    FixedField(93, "FlashFired", 'u8'),
    FixedField(94, "ISOSetting", 'u16'),
    FixedField(96, "ISO", 'u16'),
    FixedField(98, "TotalZoom", 'u16'),
    FixedField(100, "DateTimeStamp", 'u16'),
    FixedField(102, "ColorMode", 'u16'),
    FixedField(104, "DigitalZoom", 'u16'),
    FixedField(107, "Sharpness", 's8'),
)
KODAK_DATA_OFFSET = 8

RECONYX_HYPERFIRE_MAKERNOTE_VERSION = 61697

# Reconyx HyperFire bodies are always little-endian.
RECONYX_HYPERFIRE_LAYOUT = (
    FixedField(0, "MakernoteVersion", 'u16', 1, '<'),
    FixedField(2, "FirmwareVersion", 'u16', 5, '<'),
    FixedField(12, "TriggerMode", 'bytes', 2),
    FixedField(14, "Sequence", 'u16', 2, '<'),
    FixedField(18, "EventNumber", 'u16', 2, '<'),
    FixedField(22, "DateTimeOriginal", 'u16', 6, '<'),
    FixedField(36, "MoonPhase", 'u16', 1, '<'),
    FixedField(38, "AmbientTemperatureFahrenheit", 's16', 1, '<'),
    FixedField(40, "AmbientTemperature", 's16', 1, '<'),
    FixedField(42, "SerialNumber", 'utf16le', 30),
    FixedField(72, "Contrast", 'u16', 1, '<'),
    FixedField(74, "Brightness", 'u16', 1, '<'),
    FixedField(76, "Sharpness", 'u16', 1, '<'),
    FixedField(78, "Saturation", 'u16', 1, '<'),
    FixedField(80, "InfraredIlluminator", 'u16', 1, '<'),
    FixedField(82, "MotionSensitivity", 'u16', 1, '<'),
    FixedField(84, "BatteryVoltage", 'u16', 1, '<'),
    FixedField(86, "UserLabel", 'ascii', 44),
)

RECONYX_HYPERFIRE2_LAYOUT = (
    FixedField(16, "FileNumber", 'u16', 1, '<'),
    FixedField(18, "DirectoryNumber", 'u16', 1, '<'),
    FixedField(42, "FirmwareVersion", 'u16', 3, '<'),
    FixedField(48, "FirmwareDate", 'u16', 2, '<'),
    FixedField(52, "TriggerMode", 'bytes', 2),
    FixedField(54, "Sequence", 'u16', 2, '<'),
    FixedField(58, "EventNumber", 'u16', 2, '<'),
    FixedField(62, "DateTimeOriginal", 'u16', 6, '<'),
    FixedField(74, "DayOfWeek", 'u16', 1, '<'),
    FixedField(76, "MoonPhase", 'u16', 1, '<'),
    FixedField(78, "AmbientTemperatureFahrenheit", 's16', 1, '<'),
    FixedField(80, "AmbientTemperature", 's16', 1, '<'),
    FixedField(82, "Contrast", 'u16', 1, '<'),
    FixedField(84, "Brightness", 'u16', 1, '<'),
    FixedField(86, "Sharpness", 'u16', 1, '<'),
    FixedField(88, "Saturation", 'u16', 1, '<'),
    FixedField(90, "Flash", 'u16', 1, '<'),
    FixedField(92, "AmbientInfrared", 'u16', 1, '<'),
    FixedField(94, "AmbientLight", 'u16', 1, '<'),
    FixedField(96, "MotionSensitivity", 'u16', 1, '<'),
    FixedField(98, "BatteryVoltage", 'u16', 1, '<'),
    FixedField(100, "BatteryVoltageAvg", 'u16', 1, '<'),
    FixedField(102, "BatteryType", 'u16', 1, '<'),
    FixedField(104, "UserLabel", 'ascii', 22),
    FixedField(126, "SerialNumber", 'utf16le', 30),
)

# Reconyx UltraFire bodies are big-endian.
RECONYX_ULTRAFIRE_LAYOUT = (
    FixedField(0, "MakernoteLabel", 'ascii', 9),
    FixedField(10, "MakernoteID", 'u32', 1, '>'),
    FixedField(14, "MakernoteSize", 'u32', 1, '>'),
    FixedField(18, "MakernotePublicID", 'u32', 1, '>'),
    FixedField(22, "MakernotePublicSize", 'u16', 1, '>'),
    FixedField(24, "CameraVersion", 'bytes', 7),
    FixedField(31, "UIBVersion", 'bytes', 7),
    FixedField(38, "BTLVersion", 'bytes', 7),
    FixedField(45, "PEXVersion", 'bytes', 7),
    FixedField(52, "EventType", 'ascii', 1),
    FixedField(53, "Sequence", 'u8', 2),
    FixedField(55, "EventNumber", 'u32', 1, '>'),
    FixedField(59, "DateTimeOriginal", 'bytes', 7),
    FixedField(66, "DayOfWeek", 'u8'),
    FixedField(67, "MoonPhase", 'u8'),
    FixedField(68, "AmbientTemperatureFahrenheit", 's16', 1, '>'),
    FixedField(70, "AmbientTemperature", 's16', 1, '>'),
    FixedField(72, "Flash", 'u8'),
    FixedField(73, "BatteryVoltage", 'u16', 1, '>'),
    FixedField(75, "SerialNumber", 'ascii', 5),
    FixedField(80, "UserLabel", 'ascii', 20),
)

KODAK_TAGS = _names(KODAK_LAYOUT)
RECONYX_HYPERFIRE_TAGS = _names(RECONYX_HYPERFIRE_LAYOUT)
RECONYX_HYPERFIRE2_TAGS = _names(RECONYX_HYPERFIRE2_LAYOUT)
RECONYX_ULTRAFIRE_TAGS = _names(RECONYX_ULTRAFIRE_LAYOUT)

# ============================================================
# IFD-based makernotes
# ============================================================

CANON_TAGS = {
    0x0001: "CanonCameraSettings",
    0x0002: "CanonFocalLength",
    0x0004: "CanonShotInfo",
    0x0006: "CanonImageType",
    0x0007: "CanonFirmwareVersion",
    0x0008: "FileNumber",
    0x0009: "OwnerName",
    0x000C: "SerialNumber",
    0x000D: "CanonCameraInfo",
    0x000E: "CanonFileLength",
    0x000F: "CustomFunctions",
    0x0010: "CanonModelID",
    0x0011: "MovieInfo",
    0x0012: "CanonAFInfo",
    0x0095: "LensModel",
    0x00A0: "ProcessingInfo",
}

NIKON_TYPE1_TAGS = {
    0x0002: "Unknown1",
    0x0003: "Quality",
    0x0004: "ColorMode",
    0x0005: "ImageAdjustment",
    0x0006: "CCDSensitivity",
    0x0007: "WhiteBalance",
    0x0008: "Focus",
    0x0009: "Unknown2",
    0x000A: "DigitalZoom",
    0x000B: "Converter",
    0x0F00: "Unknown3",
}

NIKON_TYPE2_TAGS = {
    0x0001: "MakerNoteVersion",
    0x0002: "ISO",
    0x0003: "ColorMode",
    0x0004: "Quality",
    0x0005: "WhiteBalance",
    0x0006: "Sharpness",
    0x0007: "FocusMode",
    0x0008: "FlashSetting",
    0x0009: "FlashType",
    0x000B: "WhiteBalanceFineTune",
    0x000D: "ProgramShift",
    0x000E: "ExposureDifference",
    0x0011: "PreviewIFD",
    0x0012: "FlashExposureComp",
    0x0013: "ISOSetting",
    0x001D: "SerialNumber",
    0x0084: "Lens",
    0x00A7: "ShutterCount",
}

OLYMPUS_TAGS = {
    0x0100: "ThumbnailImage",
    0x0200: "SpecialMode",
    0x0201: "JpegQuality",
    0x0202: "Macro",
    0x0203: "BWMode",
    0x0204: "DigitalZoom",
    0x0205: "FocalPlaneDiagonal",
    0x0206: "LensDistortionParams",
    0x0207: "CameraType",
    0x0208: "TextInfo",
    0x0209: "CameraID",
    0x0F00: "DataDump",
    0x2010: "Equipment",
    0x2020: "CameraSettings",
}

SONY_TYPE1_TAGS = {
    0x0102: "Quality",
    0x0104: "FlashExposureComp",
    0x0105: "Teleconverter",
    0x0112: "WhiteBalanceFineTune",
    0x0114: "CameraSettings",
    0x0115: "WhiteBalance",
    0x0E00: "PrintIM",
    0x1000: "MultiBurstMode",
    0x1001: "MultiBurstImageWidth",
    0x1002: "MultiBurstImageHeight",
    0xB020: "CreativeStyle",
    0xB040: "Macro",
    0xB041: "ExposureMode",
}

SONY_TYPE6_TAGS = {
    0x0513: "MakernoteThumbOffset",
    0x0514: "MakernoteThumbLength",
    0x0515: "MakernoteThumbVersion",
    0x2000: "MakernoteVersion",
}

SIGMA_TAGS = {
    0x0002: "SerialNumber",
    0x0003: "DriveMode",
    0x0004: "ResolutionMode",
    0x0005: "AutoFocusMode",
    0x0006: "FocusSetting",
    0x0007: "WhiteBalance",
    0x0008: "ExposureMode",
    0x0009: "MeteringMode",
    0x000A: "LensRange",
    0x000B: "ColorSpace",
    0x000C: "Exposure",
    0x000D: "Contrast",
    0x000E: "Shadow",
    0x000F: "Highlight",
    0x0010: "Saturation",
    0x0011: "Sharpness",
    0x0016: "Firmware",
}

CASIO_TYPE1_TAGS = {
    0x0001: "RecordingMode",
    0x0002: "Quality",
    0x0003: "FocusingMode",
    0x0004: "FlashMode",
    0x0005: "FlashIntensity",
    0x0006: "ObjectDistance",
    0x0007: "WhiteBalance",
    0x000A: "DigitalZoom",
    0x000B: "Sharpness",
    0x000C: "Contrast",
    0x000D: "Saturation",
    0x0014: "CCDSensitivity",
}

CASIO_TYPE2_TAGS = {
    0x0002: "ThumbnailDimensions",
    0x0003: "ThumbnailSize",
    0x0004: "ThumbnailOffset",
    0x0008: "QualityMode",
    0x0009: "ImageSize",
    0x000D: "FocusMode",
    0x0014: "ISOSensitivity",
    0x0019: "WhiteBalance",
    0x001D: "FocalLength",
    0x001F: "Saturation",
    0x0020: "Contrast",
    0x0021: "Sharpness",
}

FUJIFILM_TAGS = {
    0x0000: "MakernoteVersion",
    0x0010: "SerialNumber",
    0x1000: "Quality",
    0x1001: "Sharpness",
    0x1002: "WhiteBalance",
    0x1003: "ColorSaturation",
    0x1004: "Tone",
    0x1005: "ColorTemperature",
    0x1006: "Contrast",
    0x100A: "WhiteBalanceFineTune",
    0x100B: "NoiseReduction",
    0x100E: "HighISONoiseReduction",
    0x1010: "FlashMode",
    0x1011: "FlashExposureComp",
    0x1020: "Macro",
    0x1021: "FocusMode",
}

KYOCERA_TAGS = {
    0x0001: "ProprietaryThumbnail",
    0x0E00: "PrintIM",
}

LEICA_TAGS = {
    0x0300: "Quality",
    0x0302: "UserProfile",
    0x0303: "SerialNumber",
    0x0304: "WhiteBalance",
    0x0310: "LensType",
    0x0311: "ExternalSensorBrightnessValue",
    0x0312: "MeasuredLV",
    0x0313: "ApproximateFNumber",
    0x0320: "CameraTemperature",
    0x0321: "ColorTemperature",
    0x0322: "WBRedLevel",
    0x0323: "WBGreenLevel",
    0x0324: "WBBlueLevel",
}

PANASONIC_TAGS = {
    0x0001: "ImageQuality",
    0x0002: "FirmwareVersion",
    0x0003: "WhiteBalance",
    0x0007: "FocusMode",
    0x000F: "AFAreaMode",
    0x001A: "ImageStabilization",
    0x001C: "MacroMode",
    0x001F: "ShootingMode",
    0x0020: "Audio",
    0x0021: "DataDump",
    0x0022: "EasyMode",
    0x0025: "InternalSerialNumber",
}

PENTAX_TAGS = {
    0x0001: "CaptureMode",
    0x0002: "QualityLevel",
    0x0003: "FocusMode",
    0x0004: "FlashMode",
    0x0007: "WhiteBalance",
    0x000A: "DigitalZoom",
    0x000B: "Sharpness",
    0x000C: "Contrast",
    0x000D: "Saturation",
    0x0014: "ISOSpeed",
    0x0017: "Colour",
    0x0E00: "PrintIM",
}

SANYO_TAGS = {
    0x00FF: "MakernoteOffset",
    0x0100: "SanyoThumbnail",
    0x0200: "SpecialMode",
    0x0201: "SanyoQuality",
    0x0202: "Macro",
    0x0204: "DigitalZoom",
    0x0207: "SoftwareVersion",
    0x0208: "PictInfo",
    0x0209: "CameraID",
    0x020E: "SequentialShot",
    0x020F: "WideRange",
    0x0210: "ColorAdjustmentMode",
}

RICOH_TAGS = {
    0x0001: "MakernoteDataType",
    0x0002: "FirmwareVersion",
    0x0E00: "PrintIM",
    0x2001: "RicohCameraInfoMakernoteSubIFD",
}

APPLE_TAGS = {
    0x0001: "MakerNoteVersion",
    0x0003: "RunTime",
    0x0008: "AccelerationVector",
    0x000A: "HDRImageType",
    0x000B: "BurstUUID",
    0x0011: "ContentIdentifier",
    0x0015: "ImageUniqueID",
}

SAMSUNG_TYPE2_TAGS = {
    0x0001: "MakerNoteVersion",
    0x0002: "DeviceType",
    0x0003: "SamsungModelID",
    0x0011: "OrientationInfo",
    0x0020: "SmartAlbumColor",
    0x0021: "PictureWizard",
    0x0030: "LocalLocationName",
    0x0035: "PreviewIFD",
    0x0043: "CameraTemperature",
    0xA001: "FirmwareName",
    0xA003: "LensType",
    0xA010: "SensorAreas",
}
