"""Tag numbers and names.

Not exhaustive, add here as needed.  Names are only used for display.
"""

EXIF_IFD_POINTER = 0x8769
GPS_INFO_IFD_POINTER = 0x8825
INTEROPERABILITY_IFD_POINTER = 0xA005
JPEG_THUMBNAIL_OFFSET = 0x0201
JPEG_THUMBNAIL_LENGTH = 0x0202

IMAGE_DESCRIPTION = 0x010E
ORIENTATION = 0x0112
MODIFY_DATE = 0x0132

# Entries with these tags point to sub-directories.
SUBIFD_TAGS = (
    EXIF_IFD_POINTER, GPS_INFO_IFD_POINTER, INTEROPERABILITY_IFD_POINTER
)


class gps(object):
    LATITUDE_REF = 0x0001
    LATITUDE = 0x0002
    LONGITUDE_REF = 0x0003
    LONGITUDE = 0x0004
    ALTITUDE_REF = 0x0005
    ALTITUDE = 0x0006


# Tags found in IFD0, IFD1 and the Exif IFD.
TAGS = {
    "NewSubfileType": {"number": 254},
    "ImageWidth": {"number": 256},
    "ImageLength": {"number": 257},
    "BitsPerSample": {"number": 258},
    "Compression": {"number": 259},
    "PhotometricInterpretation": {"number": 262},
    "ImageDescription": {"number": IMAGE_DESCRIPTION},
    "Make": {"number": 271},
    "Model": {"number": 272},
    "StripOffsets": {"number": 273},
    "Orientation": {"number": ORIENTATION},
    "SamplesPerPixel": {"number": 277},
    "RowsPerStrip": {"number": 278},
    "StripByteCounts": {"number": 279},
    "XResolution": {"number": 282},
    "YResolution": {"number": 283},
    "PlanarConfiguration": {"number": 284},
    "ResolutionUnit": {"number": 296},
    "TransferFunction": {"number": 301},
    "Software": {"number": 305},
    "ModifyDate": {"number": MODIFY_DATE},
    "Artist": {"number": 315},
    "WhitePoint": {"number": 318},
    "PrimaryChromaticities": {"number": 319},
    "JPEGInterchangeFormat": {"number": JPEG_THUMBNAIL_OFFSET},
    "JPEGInterchangeFormatLength": {"number": JPEG_THUMBNAIL_LENGTH},
    "YCbCrCoefficients": {"number": 529},
    "YCbCrSubSampling": {"number": 530},
    "YCbCrPositioning": {"number": 531},
    "ReferenceBlackWhite": {"number": 532},
    "XMLPacket": {"number": 700},
    "Copyright": {"number": 33432},
    "ExposureTime": {"number": 33434},
    "FNumber": {"number": 33437},
    "ExifTag": {"number": EXIF_IFD_POINTER},
    "ExposureProgram": {"number": 34850},
    "SpectralSensitivity": {"number": 34852},
    "GPSTag": {"number": GPS_INFO_IFD_POINTER},
    "ISOSpeedRatings": {"number": 34855},
    "OECF": {"number": 34856},
    "ExifVersion": {"number": 36864},
    "DateTimeOriginal": {"number": 36867},
    "DateTimeDigitized": {"number": 36868},
    "OffsetTime": {"number": 36880},
    "OffsetTimeOriginal": {"number": 36881},
    "OffsetTimeDigitized": {"number": 36882},
    "ComponentsConfiguration": {"number": 37121},
    "CompressedBitsPerPixel": {"number": 37122},
    "ShutterSpeedValue": {"number": 37377},
    "ApertureValue": {"number": 37378},
    "BrightnessValue": {"number": 37379},
    "ExposureBiasValue": {"number": 37380},
    "MaxApertureValue": {"number": 37381},
    "SubjectDistance": {"number": 37382},
    "MeteringMode": {"number": 37383},
    "LightSource": {"number": 37384},
    "Flash": {"number": 37385},
    "FocalLength": {"number": 37386},
    "SubjectArea": {"number": 37396},
    "MakerNote": {"number": 37500},
    "UserComment": {"number": 37510},
    "SubSecTime": {"number": 37520},
    "SubSecTimeOriginal": {"number": 37521},
    "SubSecTimeDigitized": {"number": 37522},
    "FlashpixVersion": {"number": 40960},
    "ColorSpace": {"number": 40961},
    "PixelXDimension": {"number": 40962},
    "PixelYDimension": {"number": 40963},
    "RelatedSoundFile": {"number": 40964},
    "InteroperabilityTag": {"number": INTEROPERABILITY_IFD_POINTER},
    "FlashEnergy": {"number": 41483},
    "FocalPlaneXResolution": {"number": 41486},
    "FocalPlaneYResolution": {"number": 41487},
    "FocalPlaneResolutionUnit": {"number": 41488},
    "SubjectLocation": {"number": 41492},
    "ExposureIndex": {"number": 41493},
    "SensingMethod": {"number": 41495},
    "FileSource": {"number": 41728},
    "SceneType": {"number": 41729},
    "CFAPattern": {"number": 41730},
    "CustomRendered": {"number": 41985},
    "ExposureMode": {"number": 41986},
    "WhiteBalance": {"number": 41987},
    "DigitalZoomRatio": {"number": 41988},
    "FocalLengthIn35mmFilm": {"number": 41989},
    "SceneCaptureType": {"number": 41990},
    "GainControl": {"number": 41991},
    "Contrast": {"number": 41992},
    "Saturation": {"number": 41993},
    "Sharpness": {"number": 41994},
    "SubjectDistanceRange": {"number": 41996},
    "ImageUniqueID": {"number": 42016},
    "CameraOwnerName": {"number": 42032},
    "BodySerialNumber": {"number": 42033},
    "LensSpecification": {"number": 42034},
    "LensMake": {"number": 42035},
    "LensModel": {"number": 42036},
    "LensSerialNumber": {"number": 42037},
    "Gamma": {"number": 42240},
    "PrintImageMatching": {"number": 50341},
    "DNGVersion": {"number": 50706},
    "UniqueCameraModel": {"number": 50708},
}

GPS_TAGS = {
    "GPSVersionID": {"number": 0x0000},
    "GPSLatitudeRef": {"number": gps.LATITUDE_REF},
    "GPSLatitude": {"number": gps.LATITUDE},
    "GPSLongitudeRef": {"number": gps.LONGITUDE_REF},
    "GPSLongitude": {"number": gps.LONGITUDE},
    "GPSAltitudeRef": {"number": gps.ALTITUDE_REF},
    "GPSAltitude": {"number": gps.ALTITUDE},
    "GPSTimeStamp": {"number": 0x0007},
    "GPSSatellites": {"number": 0x0008},
    "GPSStatus": {"number": 0x0009},
    "GPSMeasureMode": {"number": 0x000A},
    "GPSDOP": {"number": 0x000B},
    "GPSSpeedRef": {"number": 0x000C},
    "GPSSpeed": {"number": 0x000D},
    "GPSTrackRef": {"number": 0x000E},
    "GPSTrack": {"number": 0x000F},
    "GPSImgDirectionRef": {"number": 0x0010},
    "GPSImgDirection": {"number": 0x0011},
    "GPSMapDatum": {"number": 0x0012},
    "GPSDestLatitudeRef": {"number": 0x0013},
    "GPSDestLatitude": {"number": 0x0014},
    "GPSDestLongitudeRef": {"number": 0x0015},
    "GPSDestLongitude": {"number": 0x0016},
    "GPSDestBearingRef": {"number": 0x0017},
    "GPSDestBearing": {"number": 0x0018},
    "GPSDestDistanceRef": {"number": 0x0019},
    "GPSDestDistance": {"number": 0x001A},
    "GPSProcessingMethod": {"number": 0x001B},
    "GPSAreaInformation": {"number": 0x001C},
    "GPSDateStamp": {"number": 0x001D},
    "GPSDifferential": {"number": 0x001E},
    "GPSHPositioningError": {"number": 0x001F},
}

INTEROPERABILITY_TAGS = {
    "InteroperabilityIndex": {"number": 0x0001},
    "InteroperabilityVersion": {"number": 0x0002},
    "RelatedImageFileFormat": {"number": 0x1000},
    "RelatedImageWidth": {"number": 0x1001},
    "RelatedImageLength": {"number": 0x1002},
}

# We need the reverse mappings as well.
TAGNUM2NAME = {value["number"]: key for key, value in TAGS.items()}
GPS_TAGNUM2NAME = {value["number"]: key for key, value in GPS_TAGS.items()}
INTEROPERABILITY_TAGNUM2NAME = {
    value["number"]: key for key, value in INTEROPERABILITY_TAGS.items()
}

_TAGNUM2NAME_WITH_IFD = {
    GPS_INFO_IFD_POINTER: GPS_TAGNUM2NAME,
    INTEROPERABILITY_IFD_POINTER: INTEROPERABILITY_TAGNUM2NAME,
}


def tag_name(tag, ident=0):
    """Return the name of a tag, or the numeric tag if we don't recognize it.

    Parameters
    ----------
    tag : int
        tag number
    ident : int
        identifier of the directory holding the tag, which selects the
        namespace (GPS and Interoperability tags reuse small numbers)
    """
    mapping = _TAGNUM2NAME_WITH_IFD.get(ident, TAGNUM2NAME)
    return mapping.get(tag, tag)
